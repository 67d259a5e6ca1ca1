from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError
from clinicpos.domain.base import bulk_delete, model_to_dict
from clinicpos.domain.opd.models import Appointment, OpdVisit
from clinicpos.domain.opd.repository import AppointmentRepository, OpdVisitRepository
from clinicpos.domain.settings.service import SettingsService
from clinicpos.utils.formatting import next_code

# Clinical fields a visit may change after it is opened
VISIT_PATCH_FIELDS = ("status", "diagnosis", "prescription", "notes")


class OpdVisitService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = OpdVisitRepository(db)
        self.settings = SettingsService(db)

    async def list_visits(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        rows = await self.repo.get_all_with_patient(limit=limit)
        return [model_to_dict(visit, patient_name=name) for visit, name in rows]

    async def get_visit(self, visit_id: int) -> OpdVisit:
        visit = await self.repo.get_by_id(visit_id)
        if not visit:
            raise NotFoundError("OPD visit not found")
        return visit

    async def create_visit(self, data: Dict[str, Any]) -> OpdVisit:
        data = dict(data)
        if not data.get("visit_id"):
            prefix = await self.settings.prefix("visit_prefix", "VIS")
            data["visit_id"] = next_code(prefix, await self.repo.max_id() + 1)

        visit = await self.repo.create(data)
        logger.info(f"Opened OPD visit {visit.visit_id} for patient {visit.patient_id}")
        return visit

    async def patch_visit(self, visit_id: int, data: Dict[str, Any]) -> OpdVisit:
        visit = await self.get_visit(visit_id)
        changes = {k: v for k, v in data.items() if k in VISIT_PATCH_FIELDS}
        return await self.repo.update(visit, changes)


class AppointmentService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = AppointmentRepository(db)

    async def list_appointments(self) -> List[Dict[str, Any]]:
        rows = await self.repo.get_all_with_patient()
        return [model_to_dict(appointment, patient_name=name) for appointment, name in rows]

    async def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = await self.repo.get_by_id(appointment_id)
        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    async def create_appointment(self, data: Dict[str, Any]) -> Appointment:
        return await self.repo.create(data)

    async def update_appointment(self, appointment_id: int, data: Dict[str, Any]) -> Appointment:
        appointment = await self.get_appointment(appointment_id)
        return await self.repo.update(appointment, data)

    async def delete_appointment(self, appointment_id: int) -> None:
        appointment = await self.get_appointment(appointment_id)
        await self.repo.delete(appointment)

    async def bulk_delete(self, ids: List[int]) -> int:
        return await bulk_delete(self.repo, ids)
