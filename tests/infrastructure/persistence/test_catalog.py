"""Tests for TenantCatalog state transitions and lookups"""

import pytest

from hrplatform.domain.enums import ProvisioningJobStatus, TenantStatus
from hrplatform.domain.exceptions import (InvalidStatusTransitionError,
                                          TenantCodeConflictError)
from hrplatform.infrastructure.persistence.catalog import TenantCatalog


class TestRegister:
    """Tests for registering a tenant with its provisioning job"""

    @pytest.mark.asyncio
    async def test_register_creates_provisioning_tenant_and_job(self, catalog, make_tenant):
        """
        GIVEN a new tenant
        WHEN registering it
        THEN tenant is provisioning and exactly one in-progress job exists
        """
        # WHEN
        tenant, job = await catalog.register(make_tenant("ACME1234"))

        # THEN
        assert tenant.id
        assert tenant.status == TenantStatus.PROVISIONING.value
        assert job.tenant_id == tenant.id
        assert job.status == ProvisioningJobStatus.IN_PROGRESS.value
        assert job.started_at is not None
        assert job.completed_at is None

        jobs = await catalog.list_jobs(tenant.id)
        assert [j.id for j in jobs] == [job.id]

    @pytest.mark.asyncio
    async def test_register_duplicate_code_raises_conflict(self, catalog, make_tenant):
        """
        GIVEN a tenant already registered with code ACME1234
        WHEN another registration races in with the same code
        THEN TenantCodeConflictError is raised and only the first tenant exists
        """
        # GIVEN
        first, _ = await catalog.register(make_tenant("ACME1234"))
        first_id = first.id

        # WHEN / THEN
        with pytest.raises(TenantCodeConflictError) as exc_info:
            await catalog.register(make_tenant("ACME1234", db_name="tenant_acme1234_other"))

        assert exc_info.value.details["tenant_code"] == "ACME1234"
        stored = await catalog.get_by_code("ACME1234")
        assert stored.id == first_id


class TestTransitions:
    """Tests for tenant and job lifecycle transitions"""

    @pytest.mark.asyncio
    async def test_mark_active_completes_job(self, catalog, make_tenant):
        """
        GIVEN a provisioning tenant
        WHEN marking it active
        THEN tenant is active and job completed with completion time
        """
        tenant, job = await catalog.register(make_tenant("ACME1234"))

        await catalog.mark_active(tenant.id, job.id)

        stored = await catalog.get_by_id(tenant.id)
        jobs = await catalog.list_jobs(tenant.id)
        assert stored.status == TenantStatus.ACTIVE.value
        assert jobs[0].status == ProvisioningJobStatus.COMPLETED.value
        assert jobs[0].completed_at is not None

    @pytest.mark.asyncio
    async def test_mark_failed_suspends_tenant_and_records_error(self, catalog, make_tenant):
        """
        GIVEN a provisioning tenant
        WHEN marking it failed
        THEN tenant is suspended and job failed with error and step
        """
        tenant, job = await catalog.register(make_tenant("ACME1234"))

        await catalog.mark_failed(tenant.id, job.id, "Error creating Leave", "apply_schema")

        stored = await catalog.get_by_id(tenant.id)
        jobs = await catalog.list_jobs(tenant.id)
        assert stored.status == TenantStatus.SUSPENDED.value
        assert jobs[0].status == ProvisioningJobStatus.FAILED.value
        assert jobs[0].last_error == "Error creating Leave"
        assert jobs[0].failed_step == "apply_schema"
        assert jobs[0].completed_at is not None

    @pytest.mark.asyncio
    async def test_mark_failed_truncates_long_errors(self, catalog_session, make_tenant):
        """
        GIVEN a catalog limiting errors to 10 characters
        WHEN recording a longer error
        THEN the stored error is truncated
        """
        catalog = TenantCatalog(catalog_session, error_max_length=10)
        tenant, job = await catalog.register(make_tenant("ACME1234"))

        await catalog.mark_failed(tenant.id, job.id, "x" * 50, "create_database")

        jobs = await catalog.list_jobs(tenant.id)
        assert jobs[0].last_error == "x" * 10

    @pytest.mark.asyncio
    async def test_terminal_state_is_set_once(self, catalog, make_tenant):
        """
        GIVEN a tenant already marked active
        WHEN marking it active or failed again
        THEN InvalidStatusTransitionError is raised and state is unchanged
        """
        tenant, job = await catalog.register(make_tenant("ACME1234"))
        await catalog.mark_active(tenant.id, job.id)

        with pytest.raises(InvalidStatusTransitionError):
            await catalog.mark_active(tenant.id, job.id)
        with pytest.raises(InvalidStatusTransitionError):
            await catalog.mark_failed(tenant.id, job.id, "late failure")

        stored = await catalog.get_by_id(tenant.id)
        assert stored.status == TenantStatus.ACTIVE.value


class TestQueries:
    """Tests for catalog lookups"""

    @pytest.mark.asyncio
    async def test_list_active_excludes_other_statuses(
        self, catalog, make_tenant, register_with_status
    ):
        """
        GIVEN one active, one suspended and one provisioning tenant
        WHEN listing active tenants
        THEN only the active tenant is returned
        """
        await register_with_status(make_tenant("ACTV1111"), TenantStatus.ACTIVE)
        await register_with_status(make_tenant("SUSP2222"), TenantStatus.SUSPENDED)
        await register_with_status(make_tenant("PROV3333"), TenantStatus.PROVISIONING)

        active = await catalog.list_active()

        assert [tenant.code for tenant in active] == ["ACTV1111"]

    @pytest.mark.asyncio
    async def test_list_all_includes_every_status(
        self, catalog, make_tenant, register_with_status
    ):
        """
        GIVEN one active, one suspended and one provisioning tenant
        WHEN listing all tenants
        THEN all three are returned, oldest first
        """
        await register_with_status(make_tenant("AAAA1111"), TenantStatus.ACTIVE)
        await register_with_status(make_tenant("BBBB2222"), TenantStatus.SUSPENDED)
        await register_with_status(make_tenant("CCCC3333"), TenantStatus.PROVISIONING)

        tenants = await catalog.list_all()

        assert [tenant.code for tenant in tenants] == ["AAAA1111", "BBBB2222", "CCCC3333"]

    @pytest.mark.asyncio
    async def test_get_by_admin_email_is_case_insensitive(self, catalog, make_tenant):
        """
        GIVEN a tenant registered with admin email owner@acme.com
        WHEN looking it up with different casing
        THEN the tenant is found
        """
        tenant, _ = await catalog.register(make_tenant("ACME1234", admin_email="owner@acme.com"))

        found = await catalog.get_by_admin_email("  Owner@ACME.com ")

        assert found is not None
        assert found.id == tenant.id
        assert await catalog.get_by_admin_email("nobody@acme.com") is None

    @pytest.mark.asyncio
    async def test_record_schema_state_upserts(self, catalog, make_tenant):
        """
        GIVEN a registered tenant
        WHEN recording schema state twice
        THEN a single row holds the latest values
        """
        tenant, _ = await catalog.register(make_tenant("ACME1234"))

        await catalog.record_schema_state(tenant.id, "2024.1", "Payroll")
        await catalog.record_schema_state(tenant.id, "2024.1", "Announcements")

        state = await catalog.get_schema_state(tenant.id)
        assert state.schema_version == "2024.1"
        assert state.last_applied_module == "Announcements"
