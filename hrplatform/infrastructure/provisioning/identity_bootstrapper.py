"""
Administrator bootstrap inside a tenant database.

Each step is get-or-create, so running the bootstrap again for the same
email leaves exactly one user, one CompanyAdmin role and one assignment.
An existing user's password is never overwritten.
"""
import asyncio
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hrplatform.infrastructure.config.settings import Settings
from hrplatform.infrastructure.persistence.database import TenantConnectionFactory
from hrplatform.infrastructure.persistence.tenant_schema.identity import (
    COMPANY_ADMIN_ROLE, DEFAULT_ROLES, Role, User, UserRole)
from hrplatform.infrastructure.provisioning.base import validate_database_name
from hrplatform.infrastructure.security.password import get_password_hash
from hrplatform.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ADMIN_NAME = "Admin"


@dataclass(frozen=True)
class AdminBootstrapResult:
    """Result of bootstrapping the tenant administrator"""

    user_id: str
    role_id: str
    user_created: bool
    role_created: bool
    role_assigned: bool


class TenantIdentityBootstrapper:
    """Creates the first CompanyAdmin user of a tenant"""

    def __init__(self, settings: Settings, connections: TenantConnectionFactory | None = None):
        self.settings = settings
        self.connections = connections or TenantConnectionFactory(settings)

    async def bootstrap_admin(
        self,
        db_name: str,
        email: str,
        password: str,
        full_name: str = DEFAULT_ADMIN_NAME,
    ) -> AdminBootstrapResult:
        validate_database_name(db_name)
        email = email.strip().lower()

        async with self.connections.session(db_name) as session:
            role, role_created = await self._get_or_create_admin_role(session)
            user, user_created = await self._get_or_create_user(
                session, email, password, full_name or DEFAULT_ADMIN_NAME
            )
            role_assigned = await self._assign_role(session, user.id, role.id)
            await session.commit()

        logger.info(
            f"Admin {email} bootstrapped in {db_name} "
            f"(user_created={user_created}, role_assigned={role_assigned})"
        )
        return AdminBootstrapResult(
            user_id=user.id,
            role_id=role.id,
            user_created=user_created,
            role_created=role_created,
            role_assigned=role_assigned,
        )

    async def _get_or_create_admin_role(self, session: AsyncSession) -> tuple[Role, bool]:
        result = await session.execute(select(Role).where(Role.name == COMPANY_ADMIN_ROLE))
        role = result.scalar_one_or_none()
        if role is not None:
            return role, False

        role = Role(
            name=COMPANY_ADMIN_ROLE,
            description=DEFAULT_ROLES[COMPANY_ADMIN_ROLE]["description"],
            is_system=True,
        )
        session.add(role)
        await session.flush()
        return role, True

    async def _get_or_create_user(
        self, session: AsyncSession, email: str, password: str, full_name: str
    ) -> tuple[User, bool]:
        result = await session.execute(select(User).where(func.lower(User.email) == email))
        user = result.scalar_one_or_none()
        if user is not None:
            return user, False

        # Offload CPU-intensive bcrypt hashing to thread pool to avoid blocking event loop
        password_hash = await asyncio.to_thread(
            get_password_hash, password, self.settings.password_hash_rounds
        )
        user = User(
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            email_confirmed=True,
            is_active=True,
        )
        session.add(user)
        await session.flush()
        return user, True

    async def _assign_role(self, session: AsyncSession, user_id: str, role_id: str) -> bool:
        """Assign the role unless the (user, role) pair already exists"""
        result = await session.execute(
            select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role_id == role_id)
        )
        if result.scalar_one_or_none() is not None:
            return False

        session.add(UserRole(user_id=user_id, role_id=role_id))
        await session.flush()
        return True
