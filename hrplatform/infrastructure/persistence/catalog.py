"""
Control-plane tenant catalog.

The catalog is the system of record for tenants, their database coordinates
and their provisioning jobs. Every write method here commits: each status
change is durable before the next provisioning step runs.

State machines:
    Tenant:          provisioning -> active | suspended
    ProvisioningJob: in_progress  -> completed | failed
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrplatform.domain.enums import ProvisioningJobStatus, TenantStatus
from hrplatform.domain.exceptions import (InvalidStatusTransitionError,
                                          TenantCodeConflictError,
                                          TenantNotFoundException)
from hrplatform.infrastructure.persistence.models.provisioning_job import \
    ProvisioningJob
from hrplatform.infrastructure.persistence.models.tenant import Tenant
from hrplatform.infrastructure.persistence.models.tenant_schema_state import \
    TenantSchemaState
from hrplatform.infrastructure.persistence.repositories.provisioning_job_repo import \
    ProvisioningJobRepository
from hrplatform.infrastructure.persistence.repositories.tenant_repo import \
    TenantRepository
from hrplatform.infrastructure.persistence.repositories.tenant_schema_state_repo import \
    TenantSchemaStateRepository
from hrplatform.shared.telemetry.logging import get_logger
from hrplatform.shared.utils.generators import utc_now

logger = get_logger(__name__)

DEFAULT_ERROR_MAX_LENGTH = 2000


class TenantCatalog:
    """Tenant catalog operations over a single catalog session"""

    def __init__(self, db: AsyncSession, error_max_length: int = DEFAULT_ERROR_MAX_LENGTH):
        self.db = db
        self.error_max_length = error_max_length
        self.tenants = TenantRepository(db)
        self.jobs = ProvisioningJobRepository(db)
        self.schema_states = TenantSchemaStateRepository(db)

    # Queries

    async def get_by_id(self, tenant_id: str) -> Tenant | None:
        return await self.tenants.get_by_id(tenant_id)

    async def get_by_code(self, code: str) -> Tenant | None:
        return await self.tenants.get_by_code(code)

    async def get_by_admin_email(self, email: str) -> Tenant | None:
        return await self.tenants.get_by_admin_email(email)

    async def list_all(self) -> list[Tenant]:
        """Every tenant regardless of status, oldest first"""
        return await self.tenants.get_all(Tenant.created_at, Tenant.code)

    async def list_active(self) -> list[Tenant]:
        return await self.tenants.get_active_tenants()

    async def list_jobs(self, tenant_id: str) -> list[ProvisioningJob]:
        return await self.jobs.get_by_tenant(tenant_id)

    async def get_schema_state(self, tenant_id: str) -> TenantSchemaState | None:
        return await self.schema_states.get_by_tenant(tenant_id)

    # Commands

    async def register(self, tenant: Tenant) -> tuple[Tenant, ProvisioningJob]:
        """
        Insert a tenant in provisioning state with its in-progress job.

        Both rows are committed in one transaction. A unique-code race lost
        to a concurrent registration surfaces as TenantCodeConflictError.
        """
        tenant.status = TenantStatus.PROVISIONING.value
        try:
            tenant = await self.tenants.create(tenant)
            job = await self.jobs.create(
                ProvisioningJob(
                    tenant_id=tenant.id,
                    status=ProvisioningJobStatus.IN_PROGRESS.value,
                    started_at=utc_now(),
                )
            )
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            if await self.tenants.get_by_code(tenant.code) is not None:
                raise TenantCodeConflictError(tenant.code) from exc
            raise

        logger.info(f"Registered tenant {tenant.code} ({tenant.id}) with job {job.id}")
        return tenant, job

    async def mark_active(self, tenant_id: str, job_id: str) -> Tenant:
        """Tenant -> active and job -> completed, committed together"""
        tenant, job = await self._load_pending(tenant_id, job_id, TenantStatus.ACTIVE)

        tenant.status = TenantStatus.ACTIVE.value
        job.status = ProvisioningJobStatus.COMPLETED.value
        job.completed_at = utc_now()
        await self.db.commit()

        logger.info(f"Tenant {tenant.code} is active; job {job.id} completed")
        return tenant

    async def mark_failed(
        self, tenant_id: str, job_id: str, error: str, step: str | None = None
    ) -> Tenant:
        """
        Job -> failed (with error and step) and tenant -> suspended.

        Any transaction left open by the failing step is rolled back first.
        """
        await self.db.rollback()
        tenant, job = await self._load_pending(tenant_id, job_id, TenantStatus.SUSPENDED)

        job.status = ProvisioningJobStatus.FAILED.value
        job.last_error = (error or "unknown error")[: self.error_max_length]
        job.failed_step = step
        job.completed_at = utc_now()
        tenant.status = TenantStatus.SUSPENDED.value
        await self.db.commit()

        logger.warning(f"Tenant {tenant.code} suspended; job {job.id} failed at {step}")
        return tenant

    async def record_schema_state(
        self, tenant_id: str, schema_version: str, last_applied_module: str
    ) -> TenantSchemaState:
        state = await self.schema_states.upsert(tenant_id, schema_version, last_applied_module)
        await self.db.commit()
        return state

    async def _load_pending(
        self, tenant_id: str, job_id: str, target: TenantStatus
    ) -> tuple[Tenant, ProvisioningJob]:
        """Load a tenant and job that may still change state"""
        tenant = await self.tenants.get_by_id(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        job = await self.jobs.get_by_id(job_id)
        if job is None or job.tenant_id != tenant_id:
            raise TenantNotFoundException(tenant_id)

        if TenantStatus(tenant.status).is_terminal:
            raise InvalidStatusTransitionError("tenant", tenant_id, tenant.status, target.value)
        if ProvisioningJobStatus(job.status).is_terminal:
            job_target = (
                ProvisioningJobStatus.COMPLETED
                if target is TenantStatus.ACTIVE
                else ProvisioningJobStatus.FAILED
            )
            raise InvalidStatusTransitionError("job", job_id, job.status, job_target.value)
        return tenant, job
