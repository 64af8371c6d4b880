"""Shared test fixtures for pytest"""
from pathlib import Path

import pytest

from hrplatform.domain.enums import TenantStatus
from hrplatform.infrastructure.config.settings import Settings
from hrplatform.infrastructure.persistence import models  # noqa: F401  (registers catalog tables)
from hrplatform.infrastructure.persistence.catalog import TenantCatalog
from hrplatform.infrastructure.persistence.database import (Base, TenantConnectionFactory,
                                                           create_catalog_engine,
                                                           create_session_factory)
from hrplatform.infrastructure.persistence.models.tenant import Tenant
from hrplatform.infrastructure.provisioning.identity_bootstrapper import \
    TenantIdentityBootstrapper
from hrplatform.infrastructure.provisioning.schema_applier import TenantSchemaApplier
from hrplatform.infrastructure.provisioning.sqlite import SqliteDatabaseProvisioner


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """SQLite-backed settings with every database under tmp_path"""
    database_dir = tmp_path / "databases"
    database_dir.mkdir()
    return Settings(
        _env_file=None,
        database_driver="sqlite+aiosqlite",
        sqlite_directory=str(database_dir),
        catalog_database_name="catalog",
        database_ready_attempts=3,
        database_ready_interval_seconds=0,
        tenant_scan_timeout_seconds=5,
        password_hash_rounds=4,
    )


@pytest.fixture
async def catalog_engine(settings):
    """Create catalog database engine with all catalog tables"""
    engine = create_catalog_engine(settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def catalog_session(catalog_engine):
    """Create catalog database session"""
    async with create_session_factory(catalog_engine)() as session:
        yield session


@pytest.fixture
def catalog(catalog_session, settings) -> TenantCatalog:
    return TenantCatalog(catalog_session, error_max_length=settings.job_error_max_length)


@pytest.fixture
def connections(settings) -> TenantConnectionFactory:
    return TenantConnectionFactory(settings)


@pytest.fixture
def provisioner(settings, connections) -> SqliteDatabaseProvisioner:
    return SqliteDatabaseProvisioner(settings, connections)


@pytest.fixture
def schema_applier(settings, connections) -> TenantSchemaApplier:
    return TenantSchemaApplier(settings, connections)


@pytest.fixture
def identity_bootstrapper(settings, connections) -> TenantIdentityBootstrapper:
    return TenantIdentityBootstrapper(settings, connections)


@pytest.fixture
def tenant_database(provisioner, schema_applier):
    """Factory creating a tenant database with the full schema applied"""

    async def _create(db_name: str) -> str:
        await provisioner.ensure_database(db_name)
        await schema_applier.apply(db_name)
        return db_name

    return _create


@pytest.fixture
def make_tenant():
    """Factory building an unsaved catalog tenant"""

    def _make(
        code: str, db_name: str | None = None, admin_email: str = "owner@example.com"
    ) -> Tenant:
        return Tenant(
            code=code,
            company_name=f"{code} Ltd",
            legal_name=f"{code} Limited",
            country="US",
            time_zone="UTC",
            currency="USD",
            admin_email=admin_email,
            db_name=db_name or f"tenant_{code.lower()}_20240101000000",
            db_host="localhost",
            db_port=5432,
        )

    return _make


@pytest.fixture
def register_with_status(catalog):
    """Register a tenant in the catalog and move it to the given status"""

    async def _register(tenant: Tenant, status: TenantStatus) -> Tenant:
        tenant, job = await catalog.register(tenant)
        if status is TenantStatus.ACTIVE:
            return await catalog.mark_active(tenant.id, job.id)
        if status is TenantStatus.SUSPENDED:
            return await catalog.mark_failed(tenant.id, job.id, "setup failed", "apply_schema")
        return tenant

    return _register
