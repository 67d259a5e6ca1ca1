from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text

from clinicpos.infrastructure.database import Base


class Patient(Base):
    """Registered patient"""
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    first_name = Column(String(100))
    last_name = Column(String(100))
    age = Column(Integer)
    gender = Column(String(20))
    phone = Column(String(50))
    email = Column(String(255))
    address = Column(Text)
    city = Column(String(100))
    blood_group = Column(String(10))
    date_of_birth = Column(String(10))
    patient_type = Column(String(50), default="Out Patient")
    photo_url = Column(Text)
    emergency_contact_name = Column(String(255))
    emergency_contact_phone = Column(String(50))
    medical_history = Column(Text)
    allergies = Column(Text)
    created_at = Column(DateTime, default=datetime.now)
