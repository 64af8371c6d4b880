from hrplatform.infrastructure.persistence.repositories.base import BaseRepository
from hrplatform.infrastructure.persistence.repositories.provisioning_job_repo import \
    ProvisioningJobRepository
from hrplatform.infrastructure.persistence.repositories.tenant_repo import \
    TenantRepository
from hrplatform.infrastructure.persistence.repositories.tenant_schema_state_repo import \
    TenantSchemaStateRepository

__all__ = [
    "BaseRepository",
    "TenantRepository",
    "ProvisioningJobRepository",
    "TenantSchemaStateRepository",
]
