from clinicpos.domain.base import BaseRepository
from clinicpos.domain.integrations.models import Integration


class IntegrationRepository(BaseRepository[Integration]):
    model = Integration
    default_order = Integration.device_name.asc()
