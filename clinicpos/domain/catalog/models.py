from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, JSON, Numeric, String, Text

from clinicpos.infrastructure.database import Base


class Service(Base):
    """Billable clinic service; lab-test services carry report parameters"""
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text)
    image_url = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)
    is_lab_test = Column(Boolean, nullable=False, default=False)
    sample_collection_required = Column(Boolean, nullable=False, default=False)
    sample_type = Column(String(100))
    report_parameters = Column(JSON)


class Injection(Base):
    __tablename__ = "injections"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True)


class Package(Base):
    """Bundle of services, medicines, injections or custom lines sold together"""
    __tablename__ = "packages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    items = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.now)

    @property
    def total_price(self) -> Decimal:
        total = Decimal("0")
        for item in self.items or []:
            total += Decimal(str(item.get("quantity") or 0)) * Decimal(str(item.get("unit_price") or 0))
        return total.quantize(Decimal("0.01"))


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    generic_name = Column(String(255))
    category = Column(String(100))
    manufacturer = Column(String(255))
    batch_no = Column(String(100), index=True)
    expiry_date = Column(Date)
    unit = Column(String(50), nullable=False, default="Box")
    unit_count = Column(Integer, nullable=False, default=1)
    box_price = Column(Numeric(10, 2), nullable=False, default=0)
    qty_per_box = Column(Integer, nullable=False, default=1)
    per_med_price = Column(Numeric(10, 4), nullable=False, default=0)
    total_purchase_price = Column(Numeric(10, 2), nullable=False, default=0)
    selling_price_local = Column(Numeric(10, 2), nullable=False, default=0)
    selling_price_foreigner = Column(Numeric(10, 2), nullable=False, default=0)
    stock_count = Column(Integer, nullable=False, default=0)
    total_stock = Column(Integer, nullable=False, default=0)
    stock_alert = Column(Integer, nullable=False, default=10)
    image_url = Column(Text)
    # Mirrors stock_count for older clients
    quantity = Column(Integer, nullable=False, default=0)
    unit_price = Column(Numeric(10, 2), nullable=False, default=0)
    selling_price = Column(Numeric(10, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)


class StockAdjustment(Base):
    """One change to a medicine's stock count"""
    __tablename__ = "stock_adjustments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id", ondelete="CASCADE"), nullable=False, index=True)
    previous_stock = Column(Integer, nullable=False)
    new_stock = Column(Integer, nullable=False)
    adjustment_type = Column(String(20), nullable=False)
    reason = Column(Text)
    created_at = Column(DateTime, default=datetime.now)


class LabTest(Base):
    __tablename__ = "lab_tests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    test_code = Column(String(50), unique=True, nullable=False, index=True)
    test_name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False)
    sample_type = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(Text)
    turnaround_time = Column(String(100))
    patient_id = Column(Integer, ForeignKey("patients.id"))
    service_id = Column(Integer, ForeignKey("services.id"))
    bill_id = Column(Integer, ForeignKey("bills.id"))
    sample_collection_required = Column(Boolean, nullable=False, default=False)
    report_file_url = Column(Text)
    report_file_name = Column(String(255))
    report_results = Column(JSON)
    referrer_name = Column(String(255))
    status = Column(String(20), nullable=False, default="processing")
    created_at = Column(DateTime, default=datetime.now)
