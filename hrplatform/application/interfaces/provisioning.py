"""
Provisioning interfaces (ports) for the application layer.

These protocols define the contracts between the provisioning orchestrator
and the infrastructure that creates and populates tenant databases.
Following Dependency Inversion Principle (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hrplatform.infrastructure.provisioning.identity_bootstrapper import \
        AdminBootstrapResult
    from hrplatform.infrastructure.provisioning.schema_applier import SchemaApplyResult


class IDatabaseProvisioner(Protocol):
    """Protocol for creating physical tenant databases"""

    async def ensure_database(self, db_name: str) -> bool:
        """Create the database if absent; True when it was created by this call"""
        ...

    async def wait_until_ready(self, db_name: str) -> None:
        """Block until the database accepts connections or the retry budget is spent"""
        ...

    async def drop_database(self, db_name: str) -> None:
        """Drop the database if it exists"""
        ...


class ISchemaApplier(Protocol):
    """Protocol for applying the tenant schema and seed data"""

    async def apply(self, db_name: str) -> SchemaApplyResult:
        ...


class IIdentityBootstrapper(Protocol):
    """Protocol for creating the first administrator in a tenant database"""

    async def bootstrap_admin(
        self, db_name: str, email: str, password: str, full_name: str
    ) -> AdminBootstrapResult:
        ...


class INotificationGateway(Protocol):
    """Protocol for notifying a new tenant administrator"""

    async def send_tenant_registration_email(
        self, admin_email: str, tenant_code: str, company_name: str, login_url: str
    ) -> None:
        ...
