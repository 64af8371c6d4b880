"""SQLite tenant databases: one file per database in settings.sqlite_directory"""
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hrplatform.infrastructure.exceptions import DatabaseProvisioningError
from hrplatform.infrastructure.persistence.database import (build_database_url,
                                                           create_database_engine)
from hrplatform.infrastructure.provisioning.base import (BaseDatabaseProvisioner,
                                                        validate_database_name)
from hrplatform.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class SqliteDatabaseProvisioner(BaseDatabaseProvisioner):
    """File-backed provisioner for local development and tests"""

    def database_path(self, db_name: str) -> Path:
        return Path(self.settings.sqlite_directory).resolve() / f"{db_name}.db"

    async def ensure_database(self, db_name: str) -> bool:
        validate_database_name(db_name)
        path = self.database_path(db_name)
        if path.exists():
            logger.info(f"Database {db_name} already exists")
            return False

        engine = create_database_engine(
            self.settings, build_database_url(self.settings, db_name), pooled=False
        )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Connecting creates the file
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseProvisioningError(db_name, str(e)) from e
        finally:
            await engine.dispose()

        logger.info(f"Database {db_name} created at {path}")
        return True

    async def drop_database(self, db_name: str) -> None:
        validate_database_name(db_name)
        path = self.database_path(db_name)
        try:
            for candidate in (path, path.with_name(path.name + "-wal"), path.with_name(path.name + "-shm")):
                candidate.unlink(missing_ok=True)
        except OSError as e:
            raise DatabaseProvisioningError(db_name, str(e)) from e
        logger.info(f"Database {db_name} dropped")
