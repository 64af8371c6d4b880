from sqlalchemy import func, select

from hrplatform.domain.enums import TenantStatus
from hrplatform.infrastructure.persistence.models.tenant import Tenant
from hrplatform.infrastructure.persistence.repositories.base import BaseRepository


class TenantRepository(BaseRepository[Tenant]):
    """Repository for catalog tenant records"""

    model = Tenant

    async def get_by_code(self, code: str) -> Tenant | None:
        """Get tenant by unique code"""
        result = await self.db.execute(select(Tenant).where(Tenant.code == code))
        return result.scalar_one_or_none()

    async def get_by_admin_email(self, email: str) -> Tenant | None:
        """
        Get the most recently created tenant registered with this admin email.

        Comparison is case-insensitive.
        """
        result = await self.db.execute(
            select(Tenant)
            .where(func.lower(Tenant.admin_email) == email.strip().lower())
            .order_by(Tenant.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_active_tenants(self, skip: int = 0, limit: int | None = None) -> list[Tenant]:
        """Get active tenants ordered by code; no limit returns all of them"""
        query = (
            select(Tenant)
            .where(Tenant.status == TenantStatus.ACTIVE.value)
            .order_by(Tenant.code)
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())
