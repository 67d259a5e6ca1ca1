from typing import List, Optional, Tuple

from sqlalchemy import select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.opd.models import Appointment, OpdVisit
from clinicpos.domain.patients.models import Patient


class OpdVisitRepository(BaseRepository[OpdVisit]):
    model = OpdVisit
    default_order = OpdVisit.visit_date.desc()

    async def get_all_with_patient(self, limit: Optional[int] = None) -> List[Tuple[OpdVisit, Optional[str]]]:
        """Visits, newest first, paired with the patient's name"""
        query = (
            select(OpdVisit, Patient.name)
            .outerjoin(Patient, Patient.id == OpdVisit.patient_id)
            .order_by(OpdVisit.visit_date.desc(), OpdVisit.id.desc())
        )
        if limit:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [(visit, name) for visit, name in result.all()]


class AppointmentRepository(BaseRepository[Appointment]):
    model = Appointment

    async def get_all_with_patient(self) -> List[Tuple[Appointment, Optional[str]]]:
        result = await self.db.execute(
            select(Appointment, Patient.name)
            .outerjoin(Patient, Patient.id == Appointment.patient_id)
            .order_by(Appointment.created_at.desc(), Appointment.id.desc())
        )
        return [(appointment, name) for appointment, name in result.all()]
