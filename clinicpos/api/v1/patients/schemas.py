from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, computed_field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate
from clinicpos.utils.formatting import capitalize_gender


class PatientBase(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=150)
    gender: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    blood_group: Optional[str] = None
    date_of_birth: Optional[str] = None
    patient_type: Optional[str] = "Out Patient"
    photo_url: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    medical_history: Optional[str] = None
    allergies: Optional[str] = None


class PatientCreate(PatientBase):
    """``patient_id`` is generated from the configured prefix when omitted"""
    patient_id: Optional[str] = None
    name: str = Field(..., min_length=1)


class PatientUpdate(PatientBase, PartialUpdate):
    non_nullable = ("patient_id", "name")

    patient_id: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    patient_type: Optional[str] = None


class PatientResponse(PatientBase, ORMModel):
    id: int
    patient_id: str
    name: str
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def gender_display(self) -> str:
        return capitalize_gender(self.gender)
