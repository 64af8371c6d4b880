"""Tests for SqliteDatabaseProvisioner"""

import pytest

from hrplatform.infrastructure.exceptions import (DatabaseNotReadyError,
                                                  InvalidDatabaseNameError)


class TestEnsureDatabase:
    @pytest.mark.asyncio
    async def test_creates_database_once(self, provisioner):
        """
        GIVEN no database file for tenant_acme1234_20240101000000
        WHEN ensuring the database twice
        THEN the first call creates it and the second is a no-op
        """
        db_name = "tenant_acme1234_20240101000000"

        created = await provisioner.ensure_database(db_name)
        created_again = await provisioner.ensure_database(db_name)

        assert created is True
        assert created_again is False
        assert provisioner.database_path(db_name).exists()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("db_name", ["Tenant_ACME", "tenant-acme", 'x"; DROP TABLE tenant; --', ""])
    async def test_rejects_unsafe_names(self, provisioner, db_name):
        """
        GIVEN a name outside [a-z0-9_]
        WHEN ensuring the database
        THEN InvalidDatabaseNameError is raised before anything is created
        """
        with pytest.raises(InvalidDatabaseNameError):
            await provisioner.ensure_database(db_name)


class TestWaitUntilReady:
    @pytest.mark.asyncio
    async def test_ready_after_creation(self, provisioner):
        """
        GIVEN a freshly created database
        WHEN waiting for readiness
        THEN it returns without error
        """
        await provisioner.ensure_database("tenant_ready_1")

        await provisioner.wait_until_ready("tenant_ready_1")

    @pytest.mark.asyncio
    async def test_missing_database_exhausts_attempts(self, provisioner, settings):
        """
        GIVEN a database that was never created
        WHEN waiting for readiness
        THEN DatabaseNotReadyError reports the configured attempt count
        """
        with pytest.raises(DatabaseNotReadyError) as exc_info:
            await provisioner.wait_until_ready("tenant_never_created")

        assert exc_info.value.details["attempts"] == settings.database_ready_attempts
        assert not provisioner.database_path("tenant_never_created").exists()


class TestDropDatabase:
    @pytest.mark.asyncio
    async def test_drop_removes_file_and_tolerates_missing(self, provisioner):
        """
        GIVEN an existing database
        WHEN dropping it twice
        THEN the file is gone and the second drop does not fail
        """
        await provisioner.ensure_database("tenant_drop_1")

        await provisioner.drop_database("tenant_drop_1")
        await provisioner.drop_database("tenant_drop_1")

        assert not provisioner.database_path("tenant_drop_1").exists()
