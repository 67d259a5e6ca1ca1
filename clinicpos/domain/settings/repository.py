from typing import Optional

from sqlalchemy import select

from clinicpos.domain.base import BaseRepository
from clinicpos.domain.settings.models import ClinicSettings


class SettingsRepository(BaseRepository[ClinicSettings]):
    model = ClinicSettings

    async def get_current(self) -> Optional[ClinicSettings]:
        result = await self.db.execute(select(ClinicSettings).order_by(ClinicSettings.id).limit(1))
        return result.scalar_one_or_none()
