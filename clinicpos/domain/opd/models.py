from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from clinicpos.infrastructure.database import Base


class OpdVisit(Base):
    """Out-patient department visit"""
    __tablename__ = "opd_visits"

    id = Column(Integer, primary_key=True, autoincrement=True)
    visit_id = Column(String(50), unique=True, nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    doctor_name = Column(String(255))
    symptoms = Column(Text)
    diagnosis = Column(Text)
    prescription = Column(Text)
    notes = Column(Text)
    status = Column(String(20), nullable=False, default="active")
    visit_date = Column(DateTime, default=datetime.now)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False)
    patient_type = Column(String(50), default="Out Patient")
    department = Column(String(100))
    doctor_name = Column(String(255))
    consultation_mode = Column(String(50))
    appointment_date = Column(String(10))
    start_time = Column(String(10))
    end_time = Column(String(10))
    reason = Column(Text)
    notes = Column(Text)
    payment_mode = Column(String(50))
    status = Column(String(20), nullable=False, default="scheduled")
    created_at = Column(DateTime, default=datetime.now)
