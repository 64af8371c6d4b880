from hrplatform.infrastructure.config.settings import Settings
from hrplatform.infrastructure.persistence.database import TenantConnectionFactory
from hrplatform.infrastructure.provisioning.base import BaseDatabaseProvisioner
from hrplatform.infrastructure.provisioning.postgres import PostgresDatabaseProvisioner
from hrplatform.infrastructure.provisioning.sqlite import SqliteDatabaseProvisioner


class DatabaseProvisionerFactory:
    """Factory for creating the database provisioner for the configured backend"""

    @staticmethod
    def create_provisioner(
        settings: Settings, connections: TenantConnectionFactory | None = None
    ) -> BaseDatabaseProvisioner:
        """
        Create a database provisioner based on settings.

        Args:
            settings: Application settings
            connections: Optional tenant connection factory used for readiness polling

        Returns:
            Provisioner instance for settings.database_driver

        Raises:
            ValueError: If the driver is not supported
        """
        if settings.is_postgres:
            return PostgresDatabaseProvisioner(settings, connections)
        if settings.is_sqlite:
            return SqliteDatabaseProvisioner(settings, connections)
        raise ValueError(
            f"Unsupported database driver: {settings.database_driver}. "
            "Supported drivers: postgresql+asyncpg, sqlite+aiosqlite"
        )
