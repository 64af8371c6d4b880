from sqlalchemy import select

from hrplatform.infrastructure.persistence.models.provisioning_job import \
    ProvisioningJob
from hrplatform.infrastructure.persistence.repositories.base import BaseRepository


class ProvisioningJobRepository(BaseRepository[ProvisioningJob]):
    """Repository for provisioning job history"""

    model = ProvisioningJob

    async def get_by_tenant(self, tenant_id: str) -> list[ProvisioningJob]:
        """All jobs for a tenant, oldest first"""
        result = await self.db.execute(
            select(ProvisioningJob)
            .where(ProvisioningJob.tenant_id == tenant_id)
            .order_by(ProvisioningJob.started_at)
        )
        return list(result.scalars().all())
