from hrplatform.application.dtos.tenant_registration import (RegisterTenantRequest,
                                                              RegisterTenantResponse)

__all__ = ["RegisterTenantRequest", "RegisterTenantResponse"]
