"""PostgreSQL tenant database provisioning over an AUTOCOMMIT admin connection"""
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from hrplatform.infrastructure.exceptions import DatabaseProvisioningError
from hrplatform.infrastructure.persistence.database import (build_database_url,
                                                           create_database_engine)
from hrplatform.infrastructure.provisioning.base import (BaseDatabaseProvisioner,
                                                        validate_database_name)
from hrplatform.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DUPLICATE_DATABASE_SQLSTATE = "42P04"


class PostgresDatabaseProvisioner(BaseDatabaseProvisioner):
    """
    Creates and drops tenant databases on a PostgreSQL server.

    CREATE DATABASE cannot run inside a transaction, so the admin engine
    connects to the administrative database with AUTOCOMMIT isolation.
    """

    def _get_admin_engine(self) -> AsyncEngine:
        url = build_database_url(self.settings, self.settings.admin_database_name, admin=True)
        return create_database_engine(
            self.settings, url, pooled=False, isolation_level="AUTOCOMMIT"
        )

    async def ensure_database(self, db_name: str) -> bool:
        validate_database_name(db_name)
        admin_engine = self._get_admin_engine()
        logger.info(f"Provisioning database {db_name}")

        try:
            async with admin_engine.connect() as conn:
                exists = (
                    await conn.execute(
                        text("SELECT 1 FROM pg_database WHERE datname = :db"), {"db": db_name}
                    )
                ).scalar()
                if exists:
                    logger.info(f"Database {db_name} already exists")
                    return False

                try:
                    await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
                except DBAPIError as e:
                    # Lost a race with a concurrent creator; the database exists now
                    if _is_duplicate_database(e):
                        logger.info(f"Database {db_name} created concurrently")
                        return False
                    raise
                logger.info(f"Database {db_name} created")
                return True
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseProvisioningError(db_name, str(e)) from e
        finally:
            await admin_engine.dispose()

    async def drop_database(self, db_name: str) -> None:
        validate_database_name(db_name)
        admin_engine = self._get_admin_engine()

        try:
            async with admin_engine.connect() as conn:
                # close active connections
                await conn.execute(
                    text(
                        """
                        SELECT pg_terminate_backend(pid)
                        FROM pg_stat_activity
                        WHERE datname = :db_name
                          AND pid <> pg_backend_pid()
                        """
                    ),
                    {"db_name": db_name},
                )
                await conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            logger.info(f"Database {db_name} dropped")
        except (SQLAlchemyError, OSError) as e:
            raise DatabaseProvisioningError(db_name, str(e)) from e
        finally:
            await admin_engine.dispose()


def _is_duplicate_database(error: DBAPIError) -> bool:
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
    return sqlstate == DUPLICATE_DATABASE_SQLSTATE or "already exists" in str(error.orig)
