"""
Create the control-plane catalog database and its tables.

Safe to run repeatedly: the database is created only if missing and tables
are created with checkfirst.

Usage:
    python -m scripts.init_catalog
"""
import asyncio

from hrplatform.infrastructure.config.settings import get_settings
from hrplatform.infrastructure.persistence import models  # noqa: F401  (registers catalog tables)
from hrplatform.infrastructure.persistence.database import Base, create_catalog_engine
from hrplatform.infrastructure.provisioning.factory import DatabaseProvisionerFactory
from hrplatform.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


async def init_catalog():
    settings = get_settings()
    provisioner = DatabaseProvisionerFactory.create_provisioner(settings)
    await provisioner.ensure_database(settings.catalog_database_name)

    engine = create_catalog_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()

    logger.info(f"Catalog database {settings.catalog_database_name} is ready")


if __name__ == "__main__":
    setup_logging()
    asyncio.run(init_catalog())
