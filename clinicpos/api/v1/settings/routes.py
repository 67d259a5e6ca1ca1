from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.api.deps import get_current_user
from clinicpos.api.v1.settings.schemas import ClinicSettingsResponse, ClinicSettingsUpdate, PublicSettingsResponse
from clinicpos.domain.auth.models import User
from clinicpos.domain.settings.service import SettingsService
from clinicpos.infrastructure.database import get_db

router = APIRouter(prefix="/settings", tags=["Settings"])
public_router = APIRouter(prefix="/public", tags=["Public"])


@router.get("", response_model=ClinicSettingsResponse)
async def get_settings(db: AsyncSession = Depends(get_db)):
    """Current clinic settings; defaults are stored on first read"""
    return await SettingsService(db).get_settings()


@router.put("", response_model=ClinicSettingsResponse)
async def update_settings(
    settings_in: ClinicSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await SettingsService(db).update_settings(settings_in.model_dump(exclude_unset=True), current_user)


@router.delete("/logo", response_model=ClinicSettingsResponse)
async def remove_logo(db: AsyncSession = Depends(get_db), current_user: User = Depends(get_current_user)):
    return await SettingsService(db).remove_logo(current_user)


@public_router.get("/settings", response_model=PublicSettingsResponse)
async def public_settings(db: AsyncSession = Depends(get_db)):
    return await SettingsService(db).public_settings()
