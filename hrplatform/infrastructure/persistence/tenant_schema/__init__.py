"""
Tenant database schema.

Models here are bound to TenantBase and are created inside each tenant's own
database by the schema applier; see registry.TENANT_SCHEMA_MODULES for the
module order.
"""
from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase

__all__ = ["TenantBase"]
