from hrplatform.application.services.duplicate_checker import TenantDuplicateChecker
from hrplatform.application.services.tenant_code_allocator import TenantCodeAllocator
from hrplatform.application.services.tenant_provisioning_service import \
    TenantProvisioningService

__all__ = ["TenantCodeAllocator", "TenantDuplicateChecker", "TenantProvisioningService"]
