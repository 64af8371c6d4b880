from hrplatform.infrastructure.provisioning.factory import DatabaseProvisionerFactory
from hrplatform.infrastructure.provisioning.identity_bootstrapper import (
    AdminBootstrapResult, TenantIdentityBootstrapper)
from hrplatform.infrastructure.provisioning.schema_applier import (SchemaApplyResult,
                                                                   TenantSchemaApplier)

__all__ = [
    "DatabaseProvisionerFactory",
    "TenantSchemaApplier",
    "SchemaApplyResult",
    "TenantIdentityBootstrapper",
    "AdminBootstrapResult",
]
