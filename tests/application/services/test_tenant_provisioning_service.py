"""Tests for TenantProvisioningService end-to-end registration"""

import asyncio
import random
import re
from unittest.mock import AsyncMock, Mock, patch

import pytest
from sqlalchemy import select, text

from hrplatform.application.dtos.tenant_registration import (REGISTRATION_SUCCESS_MESSAGE,
                                                              RegisterTenantRequest)
from hrplatform.application.services.duplicate_checker import TenantDuplicateChecker
from hrplatform.application.services.tenant_code_allocator import TenantCodeAllocator
from hrplatform.application.services.tenant_provisioning_service import \
    TenantProvisioningService
from hrplatform.domain.enums import ProvisioningJobStatus, TenantStatus
from hrplatform.domain.exceptions import (AdminEmailConflictError, TenantCodeConflictError,
                                          TenantProvisioningError)
from hrplatform.infrastructure.exceptions import DatabaseNotReadyError, SchemaModuleError
from hrplatform.infrastructure.persistence.tenant_schema.identity import (
    COMPANY_ADMIN_ROLE, Role, User, UserRole)
from hrplatform.infrastructure.persistence.tenant_schema.registry import (
    TENANT_SCHEMA_MODULES, SchemaModule)
from hrplatform.infrastructure.provisioning.schema_applier import TenantSchemaApplier


class FailingSeed:
    """Seed whose insert hits a missing table"""

    name = "failing"

    async def apply(self, conn) -> int:
        await conn.execute(text("INSERT INTO no_such_table VALUES (1)"))
        return 0


def fixed_rng(*suffixes: int) -> Mock:
    rng = Mock(spec=random.Random)
    if len(suffixes) == 1:
        rng.randint.return_value = suffixes[0]
    else:
        rng.randint.side_effect = list(suffixes)
    return rng


@pytest.fixture
def registration_request() -> RegisterTenantRequest:
    return RegisterTenantRequest(
        company_name="Acme",
        legal_name="Acme Incorporated",
        country="US",
        time_zone="America/New_York",
        currency="USD",
        admin_email="Owner@Acme.com",
        admin_password="S3cure-pass",
        admin_full_name="Ada Owner",
    )


@pytest.fixture
def broken_schema_applier(settings, connections) -> TenantSchemaApplier:
    """Applier whose 4th module fails while seeding"""
    employees = TENANT_SCHEMA_MODULES[3]
    broken = SchemaModule(
        name=employees.name, tier=employees.tier, tables=employees.tables, seeds=(FailingSeed(),)
    )
    return TenantSchemaApplier(settings, connections, modules=(*TENANT_SCHEMA_MODULES[:3], broken))


@pytest.fixture
def build_service(catalog, connections, settings, provisioner, schema_applier, identity_bootstrapper):
    """Factory wiring the service with real SQLite collaborators unless overridden"""

    def _build(rng=None, settings_overrides=None, **overrides) -> TenantProvisioningService:
        service_settings = settings.model_copy(update=settings_overrides or {})
        components = {
            "catalog": catalog,
            "duplicate_checker": TenantDuplicateChecker(catalog, connections, service_settings),
            "database_provisioner": provisioner,
            "schema_applier": schema_applier,
            "identity_bootstrapper": identity_bootstrapper,
            "notifications": AsyncMock(),
            "settings": service_settings,
            "code_allocator": TenantCodeAllocator(rng or fixed_rng(1234)),
        }
        components.update(overrides)
        return TenantProvisioningService(**components)

    return _build


async def tenant_state(catalog, code: str):
    tenant = await catalog.get_by_code(code)
    jobs = await catalog.list_jobs(tenant.id)
    return tenant, jobs


class TestRegisterTenantSuccess:
    """Tests for a successful registration"""

    @pytest.mark.asyncio
    async def test_provisions_active_tenant_with_admin(
        self, build_service, registration_request, catalog, connections
    ):
        """
        GIVEN a valid registration request
        WHEN registering the tenant
        THEN the tenant is active, its job completed, the schema recorded and
             exactly one CompanyAdmin user exists in the tenant database
        """
        service = build_service()

        response = await service.register_tenant(registration_request)

        assert response.tenant_code == "ACME1234"
        assert response.company_name == "Acme"
        assert response.login_url == "http://localhost:3000/login?tenant=ACME1234"
        assert response.message == REGISTRATION_SUCCESS_MESSAGE

        tenant, jobs = await tenant_state(catalog, "ACME1234")
        assert tenant.id == response.tenant_id
        assert tenant.status == TenantStatus.ACTIVE.value
        assert tenant.admin_email == "owner@acme.com"
        assert re.fullmatch(r"tenant_acme1234_\d{14}", tenant.db_name)
        assert [job.status for job in jobs] == [ProvisioningJobStatus.COMPLETED.value]
        state = await catalog.get_schema_state(tenant.id)
        assert state.last_applied_module == "Announcements"

        async with connections.session(tenant.db_name) as session:
            rows = (
                await session.execute(
                    select(User.email, Role.name)
                    .join(UserRole, UserRole.user_id == User.id)
                    .join(Role, Role.id == UserRole.role_id)
                )
            ).all()
        assert [tuple(row) for row in rows] == [("owner@acme.com", COMPANY_ADMIN_ROLE)]

    @pytest.mark.asyncio
    async def test_sends_registration_email(self, build_service, registration_request):
        notifications = AsyncMock()
        service = build_service(notifications=notifications)

        await service.register_tenant(registration_request)

        notifications.send_tenant_registration_email.assert_awaited_once_with(
            "owner@acme.com",
            "ACME1234",
            "Acme",
            "http://localhost:3000/login?tenant=ACME1234",
        )

    @pytest.mark.asyncio
    async def test_regenerates_code_after_collision(
        self, build_service, registration_request, catalog, make_tenant
    ):
        """
        GIVEN ACME1234 already registered
        WHEN the allocator first yields 1234 and then 5678
        THEN the tenant is registered as ACME5678
        """
        await catalog.register(make_tenant("ACME1234"))
        service = build_service(rng=fixed_rng(1234, 5678))

        response = await service.register_tenant(registration_request)

        assert response.tenant_code == "ACME5678"


class TestRegisterTenantPreflight:
    """Tests for conflicts detected before anything durable is written"""

    @pytest.mark.asyncio
    async def test_code_collision_exhausts_attempts(
        self, build_service, registration_request, catalog, make_tenant
    ):
        """
        GIVEN ACME1234 already registered and an allocator that always yields 1234
        WHEN registering Acme
        THEN the last TenantCodeConflictError is raised after every attempt
             and no tenant, job or database is created
        """
        await catalog.register(make_tenant("ACME1234"))
        provisioner = AsyncMock()
        rng = fixed_rng(1234)
        service = build_service(rng=rng, database_provisioner=provisioner)

        with pytest.raises(TenantCodeConflictError) as exc_info:
            await service.register_tenant(registration_request)

        assert exc_info.value.details["tenant_code"] == "ACME1234"
        assert rng.randint.call_count == service.settings.tenant_code_max_attempts
        assert len(await catalog.tenants.get_all()) == 1
        assert len(await catalog.jobs.get_all()) == 1
        provisioner.ensure_database.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_admin_email_in_active_tenant_is_rejected(
        self,
        build_service,
        registration_request,
        catalog,
        tenant_database,
        identity_bootstrapper,
        make_tenant,
        register_with_status,
    ):
        """
        GIVEN an active tenant whose admin is owner@acme.com
        WHEN registering a new tenant with the same admin email
        THEN AdminEmailConflictError is raised and nothing new is created
        """
        db_name = await tenant_database("tenant_beta1111_20240101000000")
        await identity_bootstrapper.bootstrap_admin(db_name, "owner@acme.com", "S3cure-pass")
        await register_with_status(make_tenant("BETA1111", db_name=db_name), TenantStatus.ACTIVE)
        provisioner = AsyncMock()
        service = build_service(database_provisioner=provisioner)

        with pytest.raises(AdminEmailConflictError) as exc_info:
            await service.register_tenant(registration_request)

        assert exc_info.value.details["tenant_code"] == "BETA1111"
        assert await catalog.get_by_code("ACME1234") is None
        provisioner.ensure_database.assert_not_awaited()


class TestRegisterTenantFailure:
    """Tests for failures after the tenant is registered"""

    @pytest.mark.asyncio
    async def test_schema_failure_suspends_tenant(
        self, build_service, broken_schema_applier, registration_request, catalog
    ):
        """
        GIVEN a schema whose 4th module fails
        WHEN registering a tenant
        THEN TenantProvisioningError is raised, the tenant is suspended, the job failed
             with the step and error recorded, and no admin is bootstrapped
        """
        bootstrapper = AsyncMock()
        service = build_service(
            schema_applier=broken_schema_applier, identity_bootstrapper=bootstrapper
        )

        with pytest.raises(TenantProvisioningError) as exc_info:
            await service.register_tenant(registration_request)

        assert exc_info.value.step == "apply_schema"
        assert isinstance(exc_info.value.__cause__, SchemaModuleError)
        tenant, jobs = await tenant_state(catalog, "ACME1234")
        assert tenant.status == TenantStatus.SUSPENDED.value
        assert len(jobs) == 1
        assert jobs[0].status == ProvisioningJobStatus.FAILED.value
        assert jobs[0].failed_step == "apply_schema"
        assert "Error creating Employees" in jobs[0].last_error
        assert jobs[0].completed_at is not None
        bootstrapper.bootstrap_admin.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_is_kept_for_inspection_by_default(
        self, build_service, broken_schema_applier, registration_request, catalog, provisioner
    ):
        service = build_service(schema_applier=broken_schema_applier)

        with pytest.raises(TenantProvisioningError):
            await service.register_tenant(registration_request)

        tenant = await catalog.get_by_code("ACME1234")
        assert provisioner.database_path(tenant.db_name).exists()

    @pytest.mark.asyncio
    async def test_database_is_reclaimed_when_enabled(
        self, build_service, broken_schema_applier, registration_request, catalog, provisioner
    ):
        """
        GIVEN reclaim_database_on_failure enabled
        WHEN provisioning fails after the database was created
        THEN the tenant database is dropped and the tenant still suspended
        """
        service = build_service(
            schema_applier=broken_schema_applier,
            settings_overrides={"reclaim_database_on_failure": True},
        )

        with pytest.raises(TenantProvisioningError):
            await service.register_tenant(registration_request)

        tenant = await catalog.get_by_code("ACME1234")
        assert tenant.status == TenantStatus.SUSPENDED.value
        assert not provisioner.database_path(tenant.db_name).exists()

    @pytest.mark.asyncio
    async def test_database_is_reclaimed_when_never_ready(
        self, build_service, registration_request, catalog, provisioner
    ):
        """
        GIVEN reclaim_database_on_failure enabled and a database that never accepts connections
        WHEN registering a tenant
        THEN provisioning fails at wait_for_database and the created database is dropped
        """
        service = build_service(settings_overrides={"reclaim_database_on_failure": True})
        not_ready = AsyncMock(side_effect=DatabaseNotReadyError("tenant_acme1234", 3, "refused"))

        with patch.object(provisioner, "wait_until_ready", not_ready):
            with pytest.raises(TenantProvisioningError) as exc_info:
                await service.register_tenant(registration_request)

        assert exc_info.value.step == "wait_for_database"
        tenant, jobs = await tenant_state(catalog, "ACME1234")
        assert tenant.status == TenantStatus.SUSPENDED.value
        assert jobs[0].failed_step == "wait_for_database"
        assert not provisioner.database_path(tenant.db_name).exists()

    @pytest.mark.asyncio
    async def test_database_creation_failure_records_step(
        self, build_service, registration_request, catalog
    ):
        provisioner = AsyncMock()
        provisioner.ensure_database.side_effect = OSError("disk full")
        service = build_service(database_provisioner=provisioner)

        with pytest.raises(TenantProvisioningError) as exc_info:
            await service.register_tenant(registration_request)

        assert exc_info.value.step == "create_database"
        assert exc_info.value.reason == "disk full"
        _, jobs = await tenant_state(catalog, "ACME1234")
        assert jobs[0].failed_step == "create_database"
        assert jobs[0].last_error == "disk full"

    @pytest.mark.asyncio
    async def test_cancellation_suspends_tenant_and_propagates(
        self, build_service, registration_request, catalog
    ):
        """
        GIVEN a registration cancelled while notifying the admin
        WHEN registering a tenant
        THEN CancelledError propagates and the tenant is suspended
        """
        notifications = AsyncMock()
        notifications.send_tenant_registration_email.side_effect = asyncio.CancelledError()
        service = build_service(notifications=notifications)

        with pytest.raises(asyncio.CancelledError):
            await service.register_tenant(registration_request)

        tenant, jobs = await tenant_state(catalog, "ACME1234")
        assert tenant.status == TenantStatus.SUSPENDED.value
        assert jobs[0].failed_step == "notify_admin"


class TestNotificationFailure:
    """Tests for notification delivery errors"""

    @pytest.mark.asyncio
    async def test_notification_failure_is_not_fatal_by_default(
        self, build_service, registration_request, catalog
    ):
        notifications = AsyncMock()
        notifications.send_tenant_registration_email.side_effect = RuntimeError("smtp down")
        service = build_service(notifications=notifications)

        response = await service.register_tenant(registration_request)

        tenant, _ = await tenant_state(catalog, response.tenant_code)
        assert tenant.status == TenantStatus.ACTIVE.value

    @pytest.mark.asyncio
    async def test_notification_failure_can_be_fatal(
        self, build_service, registration_request, catalog
    ):
        """
        GIVEN notification_failure_is_fatal enabled
        WHEN the registration email cannot be sent
        THEN provisioning fails at notify_admin and the tenant is suspended
        """
        notifications = AsyncMock()
        notifications.send_tenant_registration_email.side_effect = RuntimeError("smtp down")
        service = build_service(
            notifications=notifications,
            settings_overrides={"notification_failure_is_fatal": True},
        )

        with pytest.raises(TenantProvisioningError) as exc_info:
            await service.register_tenant(registration_request)

        assert exc_info.value.step == "notify_admin"
        tenant, jobs = await tenant_state(catalog, "ACME1234")
        assert tenant.status == TenantStatus.SUSPENDED.value
        assert jobs[0].last_error == "smtp down"


class TestFromSettings:
    """Tests for default wiring"""

    @pytest.mark.asyncio
    async def test_from_settings_provisions_with_default_collaborators(
        self, catalog_session, settings, registration_request
    ):
        service = TenantProvisioningService.from_settings(
            catalog_session, settings, rng=random.Random(7)
        )

        response = await service.register_tenant(registration_request)

        assert re.fullmatch(r"ACME\d{4}", response.tenant_code)
        tenant = await service.catalog.get_by_code(response.tenant_code)
        assert tenant.status == TenantStatus.ACTIVE.value
