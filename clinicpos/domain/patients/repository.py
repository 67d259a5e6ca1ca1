from typing import Dict, Iterable

from sqlalchemy import select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.patients.models import Patient


class PatientRepository(BaseRepository[Patient]):
    """Repository for patient data access operations"""
    model = Patient
    default_order = Patient.created_at.desc()

    async def names_by_id(self, ids: Iterable[int]) -> Dict[int, str]:
        ids = {i for i in ids if i is not None}
        if not ids:
            return {}
        result = await self.db.execute(select(Patient.id, Patient.name).where(Patient.id.in_(ids)))
        return {row.id: row.name for row in result.all()}
