"""
Pre-flight duplicate checks for tenant registration.

Runs before anything durable is written:
1. The generated tenant code must not exist in the catalog
2. The admin email must not be a user in any active tenant database

The email scan is best-effort: a tenant database that cannot be reached or
queried within the timeout is skipped and logged, not treated as a match.
"""
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from hrplatform.domain.exceptions import AdminEmailConflictError, TenantCodeConflictError
from hrplatform.infrastructure.config.settings import Settings
from hrplatform.infrastructure.persistence.catalog import TenantCatalog
from hrplatform.infrastructure.persistence.database import TenantConnectionFactory
from hrplatform.infrastructure.persistence.tenant_schema.identity import User
from hrplatform.shared.telemetry.logging import get_logger


class TenantDuplicateChecker:
    """Rejects registrations whose tenant code or admin email is taken"""

    def __init__(
        self,
        catalog: TenantCatalog,
        connections: TenantConnectionFactory,
        settings: Settings,
        logger: logging.Logger | None = None,
    ):
        self.catalog = catalog
        self.connections = connections
        self.settings = settings
        self.logger = logger or get_logger(__name__)

    async def ensure_code_available(self, code: str) -> None:
        """
        Raises:
            TenantCodeConflictError: if a tenant with this code is registered
        """
        if await self.catalog.get_by_code(code) is not None:
            raise TenantCodeConflictError(code)

    async def ensure_email_available(self, email: str) -> None:
        """
        Scan every active tenant for a user with this email (case-insensitive).

        Raises:
            AdminEmailConflictError: naming the first tenant that has the user
        """
        email = email.strip().lower()
        tenants = [(tenant.code, tenant.db_name) for tenant in await self.catalog.list_active()]

        for tenant_code, db_name in tenants:
            try:
                matches = await asyncio.wait_for(
                    self._count_users_with_email(db_name, email),
                    timeout=self.settings.tenant_scan_timeout_seconds,
                )
            except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
                reason = str(e) or type(e).__name__
                self.logger.warning(
                    f"Skipping tenant {tenant_code} in admin email check: "
                    f"database {db_name} unavailable ({reason})"
                )
                continue

            if matches:
                raise AdminEmailConflictError(email, tenant_code)

    async def _count_users_with_email(self, db_name: str, email: str) -> int:
        async with self.connections.session(db_name) as session:
            result = await session.execute(
                select(func.count()).select_from(User).where(func.lower(User.email) == email)
            )
            return int(result.scalar_one())
