from typing import List, Optional, Tuple

from sqlalchemy import func, select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.catalog.models import (
    Injection,
    LabTest,
    Medicine,
    Package,
    Service,
    StockAdjustment,
)
from clinicpos.domain.patients.models import Patient


class ServiceRepository(BaseRepository[Service]):
    model = Service
    default_order = Service.name.asc()

    async def top_priced(self, limit: int = 10) -> List[Service]:
        result = await self.db.execute(
            select(Service)
            .where(Service.is_active.is_(True))
            .order_by(Service.price.desc(), Service.id)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def count_by_category(self) -> List[Tuple[str, int]]:
        result = await self.db.execute(
            select(Service.category, func.count(Service.id))
            .group_by(Service.category)
            .order_by(func.count(Service.id).desc(), Service.category)
        )
        return [(category, count) for category, count in result.all()]


class InjectionRepository(BaseRepository[Injection]):
    model = Injection
    default_order = Injection.name.asc()


class PackageRepository(BaseRepository[Package]):
    model = Package
    default_order = Package.created_at.desc()


class MedicineRepository(BaseRepository[Medicine]):
    model = Medicine
    default_order = Medicine.name.asc()

    async def find_by_code(self, code: str) -> Optional[Medicine]:
        """Match a scanned or typed code against id, then batch number, then name"""
        lowered = code.lower()
        conditions = [
            func.lower(Medicine.batch_no) == lowered,
            func.lower(Medicine.name) == lowered,
        ]
        if code.isdigit():
            conditions.insert(0, Medicine.id == int(code))

        for condition in conditions:
            result = await self.db.execute(
                select(Medicine).where(condition).order_by(Medicine.id).limit(1)
            )
            medicine = result.scalar_one_or_none()
            if medicine is not None:
                return medicine
        return None

    async def low_stock(self) -> List[Medicine]:
        result = await self.db.execute(
            select(Medicine)
            .where(Medicine.is_active.is_(True), Medicine.stock_count <= Medicine.stock_alert)
            .order_by(Medicine.stock_count, Medicine.name)
        )
        return list(result.scalars().all())


class StockAdjustmentRepository(BaseRepository[StockAdjustment]):
    model = StockAdjustment

    async def get_by_medicine(self, medicine_id: int) -> List[StockAdjustment]:
        result = await self.db.execute(
            select(StockAdjustment)
            .where(StockAdjustment.medicine_id == medicine_id)
            .order_by(StockAdjustment.created_at.desc(), StockAdjustment.id.desc())
        )
        return list(result.scalars().all())


class LabTestRepository(BaseRepository[LabTest]):
    model = LabTest

    async def get_all_with_patient(self) -> List[Tuple[LabTest, Optional[str]]]:
        result = await self.db.execute(
            select(LabTest, Patient.name)
            .outerjoin(Patient, Patient.id == LabTest.patient_id)
            .order_by(LabTest.created_at.desc(), LabTest.id.desc())
        )
        return [(test, name) for test, name in result.all()]
