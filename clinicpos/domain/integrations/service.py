from datetime import datetime
from typing import Any, Dict, List

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinicpos.core.exceptions import NotFoundError
from clinicpos.domain.integrations.models import Integration, IntegrationStatus
from clinicpos.domain.integrations.repository import IntegrationRepository


class IntegrationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = IntegrationRepository(db)

    async def list_integrations(self) -> List[Integration]:
        return await self.repo.get_all()

    async def get_integration(self, integration_id: int) -> Integration:
        integration = await self.repo.get_by_id(integration_id)
        if not integration:
            raise NotFoundError("Integration not found")
        return integration

    async def create_integration(self, data: Dict[str, Any]) -> Integration:
        data = dict(data)
        data["status"] = data.get("status") or IntegrationStatus.DISCONNECTED
        if data["status"] == IntegrationStatus.CONNECTED:
            data["last_connected"] = datetime.now()
        return await self.repo.create(data)

    async def update_integration(self, integration_id: int, data: Dict[str, Any]) -> Integration:
        integration = await self.get_integration(integration_id)
        data = dict(data)
        if data.get("status") == IntegrationStatus.CONNECTED and integration.status != IntegrationStatus.CONNECTED:
            data["last_connected"] = datetime.now()
        integration = await self.repo.update(integration, data)
        logger.info(f"Integration {integration.device_name} is {integration.status}")
        return integration

    async def toggle(self, integration_id: int) -> Integration:
        integration = await self.get_integration(integration_id)
        if integration.status == IntegrationStatus.CONNECTED:
            new_status = IntegrationStatus.DISCONNECTED
        else:
            new_status = IntegrationStatus.CONNECTED
        return await self.update_integration(integration_id, {"status": new_status})
