from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

from clinicpos.api.v1.schemas import ORMModel, PartialUpdate

IntegrationStatusValue = Literal["connected", "disconnected"]


class IntegrationCreate(BaseModel):
    device_name: str = Field(..., min_length=1)
    device_type: str = Field(..., min_length=1)
    connection_type: str = Field(..., min_length=1)
    port: Optional[str] = None
    ip_address: Optional[str] = None
    status: Optional[IntegrationStatusValue] = None
    config: Optional[Dict[str, Any]] = None


class IntegrationUpdate(PartialUpdate):
    non_nullable = ("status",)

    status: Optional[IntegrationStatusValue] = None
    port: Optional[str] = None
    ip_address: Optional[str] = None


class IntegrationResponse(ORMModel):
    id: int
    device_name: str
    device_type: str
    connection_type: str
    port: Optional[str] = None
    ip_address: Optional[str] = None
    status: str
    last_connected: Optional[datetime] = None
    config: Optional[Dict[str, Any]] = None
