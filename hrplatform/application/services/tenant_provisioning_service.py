"""
Tenant provisioning orchestrator.

Turns a registration request into a working, isolated tenant:

Pre-flight (nothing durable written; failures raise PreflightConflictError):
1. Allocate a tenant code, regenerating on collision up to a bounded number of attempts
2. Reject an admin email that already exists in any active tenant

Saga (after the catalog insert; failures suspend the tenant):
3. Register tenant (provisioning) and job (in_progress) in the catalog
4. Create the tenant database
5. Wait until it accepts connections
6. Apply the tenant schema and seed data, record schema state
7. Bootstrap the CompanyAdmin user
8. Notify the administrator
9. Mark tenant active and job completed

There is no cross-database transaction. On failure the job is marked failed,
the tenant suspended, and the error re-raised as TenantProvisioningError.
The tenant database is kept for inspection unless reclaim_database_on_failure
is enabled.
"""
import asyncio
import logging
import random

from sqlalchemy.ext.asyncio import AsyncSession

from hrplatform.application.dtos.tenant_registration import (RegisterTenantRequest,
                                                              RegisterTenantResponse)
from hrplatform.application.interfaces.provisioning import (IDatabaseProvisioner,
                                                            IIdentityBootstrapper,
                                                            INotificationGateway,
                                                            ISchemaApplier)
from hrplatform.application.services.duplicate_checker import TenantDuplicateChecker
from hrplatform.application.services.provisioning_saga import ProvisioningSaga, SagaStep
from hrplatform.application.services.tenant_code_allocator import TenantCodeAllocator
from hrplatform.domain.enums import ProvisioningStep
from hrplatform.domain.exceptions import TenantCodeConflictError, TenantProvisioningError
from hrplatform.infrastructure.config.settings import Settings
from hrplatform.infrastructure.external.notifications import LoggingNotificationGateway
from hrplatform.infrastructure.persistence.catalog import TenantCatalog
from hrplatform.infrastructure.persistence.database import TenantConnectionFactory
from hrplatform.infrastructure.persistence.models.tenant import Tenant
from hrplatform.infrastructure.provisioning.factory import DatabaseProvisionerFactory
from hrplatform.infrastructure.provisioning.identity_bootstrapper import \
    TenantIdentityBootstrapper
from hrplatform.infrastructure.provisioning.schema_applier import TenantSchemaApplier
from hrplatform.shared.telemetry.logging import get_logger
from hrplatform.shared.utils.generators import utc_now


class TenantProvisioningService:
    """
    Orchestrates tenant registration across the catalog and the tenant database.

    All collaborators are injected; from_settings wires the default ones.
    """

    def __init__(
        self,
        catalog: TenantCatalog,
        duplicate_checker: TenantDuplicateChecker,
        database_provisioner: IDatabaseProvisioner,
        schema_applier: ISchemaApplier,
        identity_bootstrapper: IIdentityBootstrapper,
        notifications: INotificationGateway,
        settings: Settings,
        code_allocator: TenantCodeAllocator | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.catalog = catalog
        self.duplicate_checker = duplicate_checker
        self.database_provisioner = database_provisioner
        self.schema_applier = schema_applier
        self.identity_bootstrapper = identity_bootstrapper
        self.notifications = notifications
        self.settings = settings
        self.code_allocator = code_allocator or TenantCodeAllocator()
        self.logger = logger or get_logger(__name__)

    @classmethod
    def from_settings(
        cls,
        session: AsyncSession,
        settings: Settings,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ) -> "TenantProvisioningService":
        """Wire the service with the default collaborators for a catalog session"""
        connections = TenantConnectionFactory(settings)
        catalog = TenantCatalog(session, error_max_length=settings.job_error_max_length)
        return cls(
            catalog=catalog,
            duplicate_checker=TenantDuplicateChecker(catalog, connections, settings, logger),
            database_provisioner=DatabaseProvisionerFactory.create_provisioner(
                settings, connections
            ),
            schema_applier=TenantSchemaApplier(settings, connections),
            identity_bootstrapper=TenantIdentityBootstrapper(settings, connections),
            notifications=LoggingNotificationGateway(logger),
            settings=settings,
            code_allocator=TenantCodeAllocator(rng),
            logger=logger,
        )

    def login_url_for(self, tenant_code: str) -> str:
        return f"{self.settings.tenant_portal_base_url.rstrip('/')}/login?tenant={tenant_code}"

    async def register_tenant(self, request: RegisterTenantRequest) -> RegisterTenantResponse:
        """
        Register and provision a new tenant.

        Raises:
            TenantCodeConflictError: no free tenant code within the attempt budget
            AdminEmailConflictError: admin email already used in an active tenant
            TenantProvisioningError: a step after the catalog insert failed;
                the tenant is suspended and its job failed
            asyncio.CancelledError: re-raised after the same compensation
        """
        # Pre-flight
        code = await self._allocate_code(request.company_name)
        await self.duplicate_checker.ensure_email_available(request.admin_email)

        tenant = Tenant(
            code=code,
            company_name=request.company_name,
            legal_name=request.legal_name,
            country=request.country,
            time_zone=request.time_zone,
            currency=request.currency,
            admin_email=request.admin_email.strip().lower(),
            db_name=self.code_allocator.database_name_for(code, utc_now()),
            db_host=self.settings.database_host,
            db_port=self.settings.database_port,
        )
        tenant, job = await self.catalog.register(tenant)

        # Plain values only from here on: failure handling rolls back the catalog session
        tenant_id, job_id, db_name = tenant.id, job.id, tenant.db_name
        login_url = self.login_url_for(code)
        saga = ProvisioningSaga(code, self.logger)

        try:
            await saga.run(
                SagaStep(
                    ProvisioningStep.CREATE_DATABASE,
                    action=lambda: self.database_provisioner.ensure_database(db_name),
                    compensation=(
                        (lambda: self.database_provisioner.drop_database(db_name))
                        if self.settings.reclaim_database_on_failure
                        else None
                    ),
                )
            )
            await saga.run(
                SagaStep(
                    ProvisioningStep.WAIT_FOR_DATABASE,
                    action=lambda: self.database_provisioner.wait_until_ready(db_name),
                )
            )
            await saga.run(
                SagaStep(
                    ProvisioningStep.APPLY_SCHEMA,
                    action=lambda: self._apply_schema(tenant_id, db_name),
                )
            )
            await saga.run(
                SagaStep(
                    ProvisioningStep.BOOTSTRAP_IDENTITY,
                    action=lambda: self.identity_bootstrapper.bootstrap_admin(
                        db_name,
                        request.admin_email,
                        request.admin_password,
                        request.admin_full_name,
                    ),
                )
            )
            await saga.run(
                SagaStep(
                    ProvisioningStep.NOTIFY_ADMIN,
                    action=lambda: self._notify_admin(
                        request.admin_email, code, request.company_name, login_url
                    ),
                )
            )
            await saga.run(
                SagaStep(
                    ProvisioningStep.ACTIVATE_TENANT,
                    action=lambda: self.catalog.mark_active(tenant_id, job_id),
                )
            )
        except (Exception, asyncio.CancelledError) as exc:
            step = (saga.current or ProvisioningStep.CREATE_DATABASE).value
            reason = str(exc) or type(exc).__name__
            await self._fail(saga, tenant_id, job_id, code, step, reason)
            if isinstance(exc, asyncio.CancelledError):
                raise
            raise TenantProvisioningError(code, step, reason) from exc

        self.logger.info(f"Tenant {code} ({tenant_id}) provisioned in database {db_name}")
        return RegisterTenantResponse(
            tenant_id=tenant_id,
            tenant_code=code,
            company_name=request.company_name,
            login_url=login_url,
        )

    async def _allocate_code(self, company_name: str) -> str:
        """Generate a code that is not yet in the catalog, regenerating on collision"""
        attempts = self.settings.tenant_code_max_attempts
        conflict: TenantCodeConflictError | None = None
        for attempt in range(1, attempts + 1):
            code = self.code_allocator.generate(company_name)
            try:
                await self.duplicate_checker.ensure_code_available(code)
                return code
            except TenantCodeConflictError as e:
                self.logger.info(f"Tenant code {code} taken (attempt {attempt}/{attempts})")
                conflict = e
        raise conflict

    async def _apply_schema(self, tenant_id: str, db_name: str) -> None:
        result = await self.schema_applier.apply(db_name)
        if result.last_applied_module is not None:
            await self.catalog.record_schema_state(
                tenant_id, result.schema_version, result.last_applied_module
            )

    async def _notify_admin(
        self, admin_email: str, tenant_code: str, company_name: str, login_url: str
    ) -> None:
        try:
            await self.notifications.send_tenant_registration_email(
                admin_email, tenant_code, company_name, login_url
            )
        except Exception:
            if self.settings.notification_failure_is_fatal:
                raise
            self.logger.exception(
                f"Registration email for tenant {tenant_code} failed; tenant stays provisioned"
            )

    async def _fail(
        self,
        saga: ProvisioningSaga,
        tenant_id: str,
        job_id: str,
        tenant_code: str,
        step: str,
        reason: str,
    ) -> None:
        """Run compensations, then suspend the tenant and fail the job"""
        self.logger.error(f"Provisioning of tenant {tenant_code} failed at {step}: {reason}")
        await saga.compensate()
        try:
            await self.catalog.mark_failed(tenant_id, job_id, reason, step)
        except Exception:
            self.logger.exception(f"Could not record failure for tenant {tenant_code}")
