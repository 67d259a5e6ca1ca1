from sqlalchemy import Column, DateTime, Integer, JSON, String

from clinicpos.infrastructure.database import Base


class IntegrationStatus:
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class Integration(Base):
    """Peripheral device record (printer, scanner, analyzer); status only, no device I/O"""
    __tablename__ = "integrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    device_name = Column(String(255), nullable=False)
    device_type = Column(String(100), nullable=False)
    connection_type = Column(String(50), nullable=False)
    port = Column(String(50))
    ip_address = Column(String(64))
    status = Column(String(20), nullable=False, default=IntegrationStatus.DISCONNECTED)
    last_connected = Column(DateTime)
    config = Column(JSON, default=dict)
