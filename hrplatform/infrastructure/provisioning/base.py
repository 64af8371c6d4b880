"""Shared behaviour for database provisioners"""
import asyncio
import re

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from hrplatform.infrastructure.config.settings import Settings
from hrplatform.infrastructure.exceptions import (DatabaseNotReadyError,
                                                  InvalidDatabaseNameError)
from hrplatform.infrastructure.persistence.database import TenantConnectionFactory
from hrplatform.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

DATABASE_NAME_PATTERN = re.compile(r"^[a-z0-9_]{1,63}$")


def validate_database_name(db_name: str) -> str:
    """Database names are interpolated into DDL, so only [a-z0-9_] is accepted"""
    if not DATABASE_NAME_PATTERN.match(db_name):
        raise InvalidDatabaseNameError(db_name)
    return db_name


class BaseDatabaseProvisioner:
    """
    Readiness polling shared by every backend.

    Subclasses implement ensure_database and drop_database.
    """

    def __init__(self, settings: Settings, connections: TenantConnectionFactory | None = None):
        self.settings = settings
        self.connections = connections or TenantConnectionFactory(settings)

    async def wait_until_ready(self, db_name: str) -> None:
        """
        Poll the new database with SELECT 1 until it answers.

        Makes settings.database_ready_attempts attempts spaced
        settings.database_ready_interval_seconds apart.

        Raises:
            DatabaseNotReadyError: if no attempt succeeds
        """
        validate_database_name(db_name)
        attempts = self.settings.database_ready_attempts
        last_error = ""

        for attempt in range(1, attempts + 1):
            try:
                async with self.connections.engine(db_name) as engine:
                    async with engine.connect() as conn:
                        await conn.execute(text("SELECT 1"))
                logger.debug(f"Database {db_name} ready after {attempt} attempt(s)")
                return
            except (SQLAlchemyError, OSError) as e:
                last_error = str(e)
                logger.debug(f"Database {db_name} not ready (attempt {attempt}/{attempts}): {e}")
            if attempt < attempts:
                await asyncio.sleep(self.settings.database_ready_interval_seconds)

        raise DatabaseNotReadyError(db_name, attempts, last_error)
