from hrplatform.infrastructure.persistence.models.mixins import (
    CuidMixin, SoftDeleteMixin, TenantMixin, TimestampMixin)
from hrplatform.infrastructure.persistence.models.provisioning_job import \
    ProvisioningJob
from hrplatform.infrastructure.persistence.models.tenant import Tenant
from hrplatform.infrastructure.persistence.models.tenant_schema_state import \
    TenantSchemaState

__all__ = [
    # Models
    "Tenant",
    "ProvisioningJob",
    "TenantSchemaState",
    # Mixins
    "CuidMixin",
    "TenantMixin",
    "TimestampMixin",
    "SoftDeleteMixin",
]
