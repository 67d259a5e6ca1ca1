from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.v1.catalog.schemas import (
    InjectionCreate,
    InjectionResponse,
    InjectionUpdate,
    LabTestCreate,
    LabTestResponse,
    LabTestUpdate,
    MedicineCreate,
    MedicinePatch,
    MedicineResponse,
    MedicineUpdate,
    NextCodeResponse,
    PackageCreate,
    PackageResponse,
    PackageUpdate,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
    StockAdjustmentResponse,
)
from clinicpos.api.v1.schemas import BulkDeleteRequest, BulkDeleteResponse, SuccessResponse
from clinicpos.domain.catalog.service import LabTestService, MedicineService, PackageService, ServiceCatalogService
from clinicpos.infrastructure.database import get_db

services_router = APIRouter(prefix="/services", tags=["Services"])
injections_router = APIRouter(prefix="/injections", tags=["Injections"])
packages_router = APIRouter(prefix="/packages", tags=["Packages"])
medicines_router = APIRouter(prefix="/medicines", tags=["Medicines"])
lab_tests_router = APIRouter(prefix="/lab-tests", tags=["Lab Tests"])


# Services

@services_router.get("", response_model=List[ServiceResponse])
async def list_services(db: AsyncSession = Depends(get_db)):
    return await ServiceCatalogService(db).list_services()


@services_router.post("", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(service_in: ServiceCreate, db: AsyncSession = Depends(get_db)):
    return await ServiceCatalogService(db).create_service(service_in.model_dump())


@services_router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_services(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await ServiceCatalogService(db).bulk_delete_services(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@services_router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(service_id: int, service_in: ServiceUpdate, db: AsyncSession = Depends(get_db)):
    return await ServiceCatalogService(db).update_service(service_id, service_in.model_dump(exclude_unset=True))


@services_router.delete("/{service_id}", response_model=SuccessResponse)
async def delete_service(service_id: int, db: AsyncSession = Depends(get_db)):
    await ServiceCatalogService(db).delete_service(service_id)
    return SuccessResponse()


# Injections

@injections_router.get("", response_model=List[InjectionResponse])
async def list_injections(db: AsyncSession = Depends(get_db)):
    return await ServiceCatalogService(db).list_injections()


@injections_router.post("", response_model=InjectionResponse, status_code=status.HTTP_201_CREATED)
async def create_injection(injection_in: InjectionCreate, db: AsyncSession = Depends(get_db)):
    return await ServiceCatalogService(db).create_injection(injection_in.model_dump())


@injections_router.patch("/{injection_id}", response_model=InjectionResponse)
async def update_injection(injection_id: int, injection_in: InjectionUpdate, db: AsyncSession = Depends(get_db)):
    return await ServiceCatalogService(db).update_injection(
        injection_id, injection_in.model_dump(exclude_unset=True)
    )


@injections_router.delete("/{injection_id}", response_model=SuccessResponse)
async def delete_injection(injection_id: int, db: AsyncSession = Depends(get_db)):
    await ServiceCatalogService(db).delete_injection(injection_id)
    return SuccessResponse()


# Packages

@packages_router.get("", response_model=List[PackageResponse])
async def list_packages(db: AsyncSession = Depends(get_db)):
    return await PackageService(db).list_packages()


@packages_router.get("/{package_id}", response_model=PackageResponse)
async def get_package(package_id: int, db: AsyncSession = Depends(get_db)):
    return await PackageService(db).get_package(package_id)


@packages_router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create_package(package_in: PackageCreate, db: AsyncSession = Depends(get_db)):
    return await PackageService(db).create_package(package_in.model_dump())


@packages_router.put("/{package_id}", response_model=PackageResponse)
async def update_package(package_id: int, package_in: PackageUpdate, db: AsyncSession = Depends(get_db)):
    return await PackageService(db).update_package(package_id, package_in.model_dump(exclude_unset=True))


@packages_router.delete("/{package_id}", response_model=SuccessResponse)
async def delete_package(package_id: int, db: AsyncSession = Depends(get_db)):
    await PackageService(db).delete_package(package_id)
    return SuccessResponse()


# Medicines

@medicines_router.get("", response_model=List[MedicineResponse])
async def list_medicines(db: AsyncSession = Depends(get_db)):
    return await MedicineService(db).list_medicines()


@medicines_router.get("/lookup", response_model=MedicineResponse)
async def lookup_medicine(code: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    """
    Find a medicine by a scanned or typed code.

    The code is tried as a numeric id, then as a batch number, then as a
    name; both text matches ignore case.
    """
    return await MedicineService(db).lookup(code)


@medicines_router.get("/low-stock", response_model=List[MedicineResponse])
async def low_stock_medicines(db: AsyncSession = Depends(get_db)):
    return await MedicineService(db).low_stock()


@medicines_router.post("", response_model=MedicineResponse, status_code=status.HTTP_201_CREATED)
async def create_medicine(medicine_in: MedicineCreate, db: AsyncSession = Depends(get_db)):
    return await MedicineService(db).create_medicine(medicine_in.model_dump())


@medicines_router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_medicines(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await MedicineService(db).bulk_delete(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@medicines_router.get("/{medicine_id}/stock-history", response_model=List[StockAdjustmentResponse])
async def stock_history(medicine_id: int, db: AsyncSession = Depends(get_db)):
    return await MedicineService(db).stock_history(medicine_id)


@medicines_router.put("/{medicine_id}", response_model=MedicineResponse)
async def update_medicine(medicine_id: int, medicine_in: MedicineUpdate, db: AsyncSession = Depends(get_db)):
    return await MedicineService(db).update_medicine(medicine_id, medicine_in.model_dump(exclude_unset=True))


@medicines_router.patch("/{medicine_id}", response_model=MedicineResponse)
async def patch_medicine(medicine_id: int, medicine_in: MedicinePatch, db: AsyncSession = Depends(get_db)):
    return await MedicineService(db).patch_medicine(medicine_id, medicine_in.model_dump(exclude_unset=True))


@medicines_router.delete("/{medicine_id}", response_model=SuccessResponse)
async def delete_medicine(medicine_id: int, db: AsyncSession = Depends(get_db)):
    await MedicineService(db).delete_medicine(medicine_id)
    return SuccessResponse()


# Lab tests

@lab_tests_router.get("", response_model=List[LabTestResponse])
async def list_lab_tests(db: AsyncSession = Depends(get_db)):
    return await LabTestService(db).list_lab_tests()


@lab_tests_router.get("/next-code", response_model=NextCodeResponse)
async def next_lab_code(db: AsyncSession = Depends(get_db)):
    return NextCodeResponse(code=await LabTestService(db).next_code())


@lab_tests_router.post("", response_model=LabTestResponse, status_code=status.HTTP_201_CREATED)
async def create_lab_test(lab_test_in: LabTestCreate, db: AsyncSession = Depends(get_db)):
    return await LabTestService(db).create_lab_test(lab_test_in.model_dump())


@lab_tests_router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_lab_tests(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await LabTestService(db).bulk_delete(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@lab_tests_router.patch("/{lab_test_id}", response_model=LabTestResponse)
async def update_lab_test(lab_test_id: int, lab_test_in: LabTestUpdate, db: AsyncSession = Depends(get_db)):
    return await LabTestService(db).update_lab_test(lab_test_id, lab_test_in.model_dump(exclude_unset=True))


@lab_tests_router.delete("/{lab_test_id}", response_model=SuccessResponse)
async def delete_lab_test(lab_test_id: int, db: AsyncSession = Depends(get_db)):
    await LabTestService(db).delete_lab_test(lab_test_id)
    return SuccessResponse()
