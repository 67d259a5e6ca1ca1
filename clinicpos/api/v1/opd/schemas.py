from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate


class OpdVisitCreate(BaseModel):
    visit_id: Optional[str] = None
    patient_id: int
    doctor_name: Optional[str] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None
    status: str = "active"


class OpdVisitPatch(PartialUpdate):
    non_nullable = ("status",)

    status: Optional[str] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None


class OpdVisitResponse(ORMModel):
    id: int
    visit_id: str
    patient_id: int
    doctor_name: Optional[str] = None
    symptoms: Optional[str] = None
    diagnosis: Optional[str] = None
    prescription: Optional[str] = None
    notes: Optional[str] = None
    status: str
    visit_date: Optional[datetime] = None
    patient_name: Optional[str] = None


class AppointmentBase(BaseModel):
    patient_type: Optional[str] = "Out Patient"
    department: Optional[str] = None
    doctor_name: Optional[str] = None
    consultation_mode: Optional[str] = None
    appointment_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    reason: Optional[str] = None
    notes: Optional[str] = None
    payment_mode: Optional[str] = None


class AppointmentCreate(AppointmentBase):
    patient_id: int
    status: str = "scheduled"


class AppointmentUpdate(AppointmentBase, PartialUpdate):
    non_nullable = ("patient_id", "status")

    patient_id: Optional[int] = None
    patient_type: Optional[str] = None
    status: Optional[str] = None


class AppointmentResponse(AppointmentBase, ORMModel):
    id: int
    patient_id: int
    status: str
    created_at: Optional[datetime] = None
    patient_name: Optional[str] = None
