from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, JSON, Numeric, String

from clinicpos.infrastructure.database import Base


class BillStatus:
    PAID = "paid"
    PARTIAL = "partial"
    UNPAID = "unpaid"


class Bill(Base):
    """Invoice with its line items stored inline as JSON"""
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    bill_no = Column(String(50), unique=True, nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    visit_id = Column(Integer, ForeignKey("opd_visits.id"))
    items = Column(JSON, nullable=False, default=list)
    subtotal = Column(Numeric(10, 2), nullable=False, default=0)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    discount_type = Column(String(20), default="amount")
    tax = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False, default=0)
    paid_amount = Column(Numeric(10, 2), nullable=False, default=0)
    payment_method = Column(String(50), default="cash")
    reference_doctor = Column(String(255))
    payment_date = Column(Date)
    status = Column(String(20), nullable=False, default=BillStatus.UNPAID)
    created_at = Column(DateTime, default=datetime.now, index=True)
