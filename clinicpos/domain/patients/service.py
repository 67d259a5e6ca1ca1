from typing import Any, Dict, List

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError, ValidationError
from clinicpos.domain.patients.models import Patient
from clinicpos.domain.patients.repository import PatientRepository
from clinicpos.domain.settings.service import SettingsService
from clinicpos.utils.formatting import next_code


class PatientService:
    """Service layer for patient registration"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = PatientRepository(db)
        self.settings = SettingsService(db)

    async def list_patients(self) -> List[Patient]:
        return await self.repo.get_all()

    async def get_patient(self, patient_id: int) -> Patient:
        patient = await self.repo.get_by_id(patient_id)
        if not patient:
            raise NotFoundError("Patient not found")
        return patient

    async def generate_patient_id(self) -> str:
        prefix = await self.settings.prefix("patient_prefix", "PAT")
        return next_code(prefix, await self.repo.max_id() + 1)

    async def create_patient(self, data: Dict[str, Any]) -> Patient:
        data = dict(data)
        if not (data.get("name") or "").strip():
            raise ValidationError("Patient name is required")

        if not data.get("patient_id"):
            data["patient_id"] = await self.generate_patient_id()

        patient = await self.repo.create(data)
        logger.info(f"Registered patient {patient.patient_id}")
        return patient

    async def update_patient(self, patient_id: int, data: Dict[str, Any]) -> Patient:
        patient = await self.get_patient(patient_id)
        return await self.repo.update(patient, data)

    async def delete_patient(self, patient_id: int) -> None:
        patient = await self.get_patient(patient_id)
        await self.repo.delete(patient)
