from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.v1.integrations.schemas import IntegrationCreate, IntegrationResponse, IntegrationUpdate
from clinicpos.domain.integrations.service import IntegrationService
from clinicpos.infrastructure.database import get_db

router = APIRouter(prefix="/integrations", tags=["Integrations"])


@router.get("", response_model=List[IntegrationResponse])
async def list_integrations(db: AsyncSession = Depends(get_db)):
    return await IntegrationService(db).list_integrations()


@router.post("", response_model=IntegrationResponse, status_code=status.HTTP_201_CREATED)
async def create_integration(integration_in: IntegrationCreate, db: AsyncSession = Depends(get_db)):
    return await IntegrationService(db).create_integration(integration_in.model_dump(exclude_none=True))


@router.patch("/{integration_id}", response_model=IntegrationResponse)
async def update_integration(
    integration_id: int,
    integration_in: IntegrationUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await IntegrationService(db).update_integration(
        integration_id, integration_in.model_dump(exclude_unset=True)
    )


@router.post("/{integration_id}/toggle", response_model=IntegrationResponse)
async def toggle_integration(integration_id: int, db: AsyncSession = Depends(get_db)):
    """Flip between connected and disconnected; no device is contacted"""
    return await IntegrationService(db).toggle(integration_id)
