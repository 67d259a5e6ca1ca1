from decimal import Decimal
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.domain.auth.models import User
from clinicpos.domain.auth.service import ActivityLogService
from clinicpos.domain.settings.models import ClinicSettings
from clinicpos.domain.settings.repository import SettingsRepository

DEFAULT_SETTINGS: Dict[str, Any] = {
    "clinic_name": "My Clinic",
    "currency": "USD",
    "tax_rate": 0,
    "invoice_prefix": "INV",
    "visit_prefix": "VIS",
    "patient_prefix": "PAT",
}

PUBLIC_DEFAULTS: Dict[str, Any] = {
    "app_name": "ClinicPOS",
    "app_tagline": "Clinic Management System",
    "app_version": "1.0.0",
    "logo": None,
    "clinic_name": "My Clinic",
    "address": None,
    "phone": None,
    "email": None,
}


class SettingsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = SettingsRepository(db)
        self.activity = ActivityLogService(db)

    async def get_settings(self) -> ClinicSettings:
        """Current settings row, created with defaults on first access"""
        current = await self.repo.get_current()
        if current is None:
            current = await self.repo.create(dict(DEFAULT_SETTINGS))
            logger.info("Created default clinic settings")
        return current

    async def update_settings(self, data: Dict[str, Any], actor: Optional[User] = None) -> ClinicSettings:
        current = await self.get_settings()
        updated = await self.repo.update(current, data)
        await self.activity.log("update", "settings", "Clinic settings updated", actor)
        return updated

    async def remove_logo(self, actor: Optional[User] = None) -> ClinicSettings:
        current = await self.get_settings()
        updated = await self.repo.update(current, {"logo": None})
        await self.activity.log("update", "settings", "Clinic logo removed", actor)
        return updated

    async def public_settings(self) -> Dict[str, Any]:
        current = await self.repo.get_current()
        if current is None:
            return dict(PUBLIC_DEFAULTS)
        return {
            "app_name": current.app_name or PUBLIC_DEFAULTS["app_name"],
            "app_tagline": current.app_tagline,
            "app_version": current.app_version or PUBLIC_DEFAULTS["app_version"],
            "logo": current.logo,
            "clinic_name": current.clinic_name or PUBLIC_DEFAULTS["clinic_name"],
            "address": current.address,
            "phone": current.phone,
            "email": current.email,
        }

    async def prefix(self, field: str, fallback: str) -> str:
        """Configured code prefix (invoice/visit/patient), without creating the settings row"""
        current = await self.repo.get_current()
        value = getattr(current, field, None) if current else None
        return value or fallback

    async def tax_rate(self) -> Decimal:
        current = await self.repo.get_current()
        if current is None or current.tax_rate is None:
            return Decimal("0")
        return Decimal(str(current.tax_rate))
