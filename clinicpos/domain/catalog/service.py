from typing import Any, Dict, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError, ValidationError
from clinicpos.domain.base import bulk_delete, model_to_dict
from clinicpos.domain.catalog.models import Injection, LabTest, Medicine, Package, Service, StockAdjustment
from clinicpos.domain.catalog.repository import (
    InjectionRepository,
    LabTestRepository,
    MedicineRepository,
    PackageRepository,
    ServiceRepository,
    StockAdjustmentRepository,
)
from clinicpos.utils.formatting import next_code


class ServiceCatalogService:
    """Services and injections share the same simple CRUD rules"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.services = ServiceRepository(db)
        self.injections = InjectionRepository(db)

    async def list_services(self) -> List[Service]:
        return await self.services.get_all()

    async def get_service(self, service_id: int) -> Service:
        service = await self.services.get_by_id(service_id)
        if not service:
            raise NotFoundError("Service not found")
        return service

    async def create_service(self, data: Dict[str, Any]) -> Service:
        return await self.services.create(data)

    async def update_service(self, service_id: int, data: Dict[str, Any]) -> Service:
        service = await self.get_service(service_id)
        return await self.services.update(service, data)

    async def delete_service(self, service_id: int) -> None:
        await self.services.delete(await self.get_service(service_id))

    async def bulk_delete_services(self, ids: List[int]) -> int:
        return await bulk_delete(self.services, ids)

    async def list_injections(self) -> List[Injection]:
        return await self.injections.get_all()

    async def get_injection(self, injection_id: int) -> Injection:
        injection = await self.injections.get_by_id(injection_id)
        if not injection:
            raise NotFoundError("Injection not found")
        return injection

    async def create_injection(self, data: Dict[str, Any]) -> Injection:
        return await self.injections.create(data)

    async def update_injection(self, injection_id: int, data: Dict[str, Any]) -> Injection:
        injection = await self.get_injection(injection_id)
        return await self.injections.update(injection, data)

    async def delete_injection(self, injection_id: int) -> None:
        await self.injections.delete(await self.get_injection(injection_id))


class PackageService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = PackageRepository(db)

    @staticmethod
    def validate(data: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
        data = dict(data)
        if "name" in data or not partial:
            name = (data.get("name") or "").strip()
            if not name:
                raise ValidationError("Package name is required")
            data["name"] = name
        if "items" in data or not partial:
            if not data.get("items"):
                raise ValidationError("Package must contain at least one item")
        return data

    async def list_packages(self) -> List[Package]:
        return await self.repo.get_all()

    async def get_package(self, package_id: int) -> Package:
        package = await self.repo.get_by_id(package_id)
        if not package:
            raise NotFoundError("Package not found")
        return package

    async def create_package(self, data: Dict[str, Any]) -> Package:
        return await self.repo.create(self.validate(data))

    async def update_package(self, package_id: int, data: Dict[str, Any]) -> Package:
        package = await self.get_package(package_id)
        return await self.repo.update(package, self.validate(data, partial=True))

    async def delete_package(self, package_id: int) -> None:
        await self.repo.delete(await self.get_package(package_id))


class MedicineService:
    """Medicine catalog and stock keeping"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = MedicineRepository(db)
        self.adjustments = StockAdjustmentRepository(db)

    async def list_medicines(self) -> List[Medicine]:
        return await self.repo.get_all()

    async def low_stock(self) -> List[Medicine]:
        return await self.repo.low_stock()

    async def get_medicine(self, medicine_id: int) -> Medicine:
        medicine = await self.repo.get_by_id(medicine_id)
        if not medicine:
            raise NotFoundError("Medicine not found")
        return medicine

    async def lookup(self, code: Optional[str]) -> Medicine:
        code = (code or "").strip()
        if not code:
            raise ValidationError("Query parameter 'code' is required")
        medicine = await self.repo.find_by_code(code)
        if not medicine:
            raise NotFoundError("Medicine not found")
        return medicine

    async def create_medicine(self, data: Dict[str, Any]) -> Medicine:
        return await self.repo.create(data)

    async def update_medicine(self, medicine_id: int, data: Dict[str, Any]) -> Medicine:
        medicine = await self.get_medicine(medicine_id)
        return await self.repo.update(medicine, data)

    async def patch_medicine(self, medicine_id: int, data: Dict[str, Any]) -> Medicine:
        """Partial update; a supplied stock_count is recorded in the stock history"""
        medicine = await self.get_medicine(medicine_id)
        data = dict(data)
        reason = data.pop("reason", None)
        adjustment_type = data.pop("adjustment_type", None) or "set"

        if data.get("stock_count") is not None:
            data["quantity"] = data["stock_count"]
            await self.adjustments.create({
                "medicine_id": medicine.id,
                "previous_stock": medicine.stock_count or 0,
                "new_stock": data["stock_count"],
                "adjustment_type": adjustment_type,
                "reason": reason,
            })

        return await self.repo.update(medicine, data)

    async def deduct_stock(self, medicine_id: int, quantity: int, reason: str) -> Optional[Medicine]:
        """
        Stage the removal of sold units and its history row.

        Nothing is committed here; the caller commits along with the sale.
        Returns None when the medicine no longer exists.
        """
        medicine = await self.repo.get_by_id(medicine_id)
        if not medicine:
            logger.warning(f"Stock deduction skipped, medicine {medicine_id} not found")
            return None

        previous = medicine.stock_count or 0
        new_stock = max(0, previous - quantity)
        await self.adjustments.add({
            "medicine_id": medicine.id,
            "previous_stock": previous,
            "new_stock": new_stock,
            "adjustment_type": "subtract",
            "reason": reason,
        })
        medicine.stock_count = new_stock
        medicine.quantity = new_stock
        logger.info(f"Stock for {medicine.name}: {previous} -> {new_stock}")
        return medicine

    async def stock_history(self, medicine_id: int) -> List[StockAdjustment]:
        await self.get_medicine(medicine_id)
        return await self.adjustments.get_by_medicine(medicine_id)

    async def delete_medicine(self, medicine_id: int) -> None:
        await self.repo.delete(await self.get_medicine(medicine_id))

    async def bulk_delete(self, ids: List[int]) -> int:
        return await bulk_delete(self.repo, ids)


class LabTestService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = LabTestRepository(db)

    async def list_lab_tests(self) -> List[Dict[str, Any]]:
        rows = await self.repo.get_all_with_patient()
        return [model_to_dict(test, patient_name=name) for test, name in rows]

    async def get_lab_test(self, lab_test_id: int) -> LabTest:
        lab_test = await self.repo.get_by_id(lab_test_id)
        if not lab_test:
            raise NotFoundError("Lab test not found")
        return lab_test

    async def next_code(self) -> str:
        return next_code("LAB", await self.repo.max_id() + 1)

    async def create_lab_test(self, data: Dict[str, Any]) -> LabTest:
        data = dict(data)
        if not data.get("test_code"):
            data["test_code"] = await self.next_code()
        return await self.repo.create(data)

    async def update_lab_test(self, lab_test_id: int, data: Dict[str, Any]) -> LabTest:
        lab_test = await self.get_lab_test(lab_test_id)
        return await self.repo.update(lab_test, data)

    async def delete_lab_test(self, lab_test_id: int) -> None:
        await self.repo.delete(await self.get_lab_test(lab_test_id))

    async def bulk_delete(self, ids: List[int]) -> int:
        return await bulk_delete(self.repo, ids)
