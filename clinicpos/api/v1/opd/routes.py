from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.v1.opd.schemas import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
    OpdVisitCreate,
    OpdVisitPatch,
    OpdVisitResponse,
)
from clinicpos.api.v1.schemas import BulkDeleteRequest, BulkDeleteResponse, SuccessResponse
from clinicpos.domain.opd.service import AppointmentService, OpdVisitService
from clinicpos.infrastructure.database import get_db

router = APIRouter(prefix="/opd-visits", tags=["OPD"])
appointments_router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.get("", response_model=List[OpdVisitResponse])
async def list_visits(db: AsyncSession = Depends(get_db)):
    return await OpdVisitService(db).list_visits()


@router.post("", response_model=OpdVisitResponse, status_code=status.HTTP_201_CREATED)
async def create_visit(visit_in: OpdVisitCreate, db: AsyncSession = Depends(get_db)):
    return await OpdVisitService(db).create_visit(visit_in.model_dump())


@router.patch("/{visit_id}", response_model=OpdVisitResponse)
async def patch_visit(visit_id: int, visit_in: OpdVisitPatch, db: AsyncSession = Depends(get_db)):
    """Only status, diagnosis, prescription and notes can change"""
    return await OpdVisitService(db).patch_visit(visit_id, visit_in.model_dump(exclude_unset=True))


@appointments_router.get("", response_model=List[AppointmentResponse])
async def list_appointments(db: AsyncSession = Depends(get_db)):
    return await AppointmentService(db).list_appointments()


@appointments_router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(appointment_in: AppointmentCreate, db: AsyncSession = Depends(get_db)):
    return await AppointmentService(db).create_appointment(appointment_in.model_dump())


@appointments_router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_appointments(request: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    deleted = await AppointmentService(db).bulk_delete(request.ids)
    return BulkDeleteResponse(deleted=deleted)


@appointments_router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    appointment_in: AppointmentUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await AppointmentService(db).update_appointment(
        appointment_id, appointment_in.model_dump(exclude_unset=True)
    )


@appointments_router.delete("/{appointment_id}", response_model=SuccessResponse)
async def delete_appointment(appointment_id: int, db: AsyncSession = Depends(get_db)):
    await AppointmentService(db).delete_appointment(appointment_id)
    return SuccessResponse()
