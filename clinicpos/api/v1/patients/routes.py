from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.v1.patients.schemas import PatientCreate, PatientResponse, PatientUpdate
from clinicpos.api.v1.schemas import SuccessResponse
from clinicpos.domain.patients.service import PatientService
from clinicpos.infrastructure.database import get_db

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get("", response_model=List[PatientResponse])
async def get_patients(db: AsyncSession = Depends(get_db)):
    """List patients, newest registration first"""
    return await PatientService(db).list_patients()


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    return await PatientService(db).get_patient(patient_id)


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(patient_data: PatientCreate, db: AsyncSession = Depends(get_db)):
    return await PatientService(db).create_patient(patient_data.model_dump())


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(patient_id: int, patient_data: PatientUpdate, db: AsyncSession = Depends(get_db)):
    return await PatientService(db).update_patient(patient_id, patient_data.model_dump(exclude_unset=True))


@router.delete("/{patient_id}", response_model=SuccessResponse)
async def delete_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    await PatientService(db).delete_patient(patient_id)
    return SuccessResponse()
