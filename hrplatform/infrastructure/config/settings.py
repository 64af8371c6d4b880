from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_DATABASE_DRIVERS = ("postgresql+asyncpg", "sqlite+aiosqlite")


class Settings(BaseSettings):
    # App
    app_name: str = "HR Platform"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database server shared by the catalog and every tenant database
    database_driver: str = "postgresql+asyncpg"  # Options: "postgresql+asyncpg", "sqlite+aiosqlite"
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = ""
    database_password: str = ""
    database_echo: bool = False

    # Control-plane catalog database
    catalog_database_name: str = "hrplatform_catalog"

    # Administrative ("master") connection used to create and drop databases.
    # Credentials fall back to database_user / database_password when unset.
    admin_database_name: str = "postgres"
    admin_database_user: str | None = None
    admin_database_password: str | None = None

    # SQLite backend keeps one file per database in this directory
    sqlite_directory: str = "./var/databases"

    # Tenant portal
    tenant_portal_base_url: str = "http://localhost:3000"

    # Provisioning
    tenant_code_max_attempts: int = 3  # 1 = fail fast on a code collision
    database_ready_attempts: int = 10
    database_ready_interval_seconds: float = 0.5
    tenant_scan_timeout_seconds: float = 5.0  # Per-tenant budget for the admin email scan
    reclaim_database_on_failure: bool = False  # Drop the tenant database when provisioning fails
    notification_failure_is_fatal: bool = False
    job_error_max_length: int = 2000
    password_hash_rounds: int = 12  # bcrypt work factor

    @model_validator(mode="after")
    def validate_provisioning_config(self) -> "Settings":
        """Validate database backend and provisioning limits"""
        if self.database_driver not in SUPPORTED_DATABASE_DRIVERS:
            raise ValueError(
                f"Invalid database_driver '{self.database_driver}'. "
                f"Must be one of: {', '.join(repr(d) for d in SUPPORTED_DATABASE_DRIVERS)}"
            )
        if self.is_postgres and not self.database_user:
            raise ValueError(
                "DATABASE_USER is required for the PostgreSQL backend. "
                "Set in environment or .env file."
            )

        for field_name in (
            "tenant_code_max_attempts",
            "database_ready_attempts",
            "job_error_max_length",
        ):
            if getattr(self, field_name) < 1:
                raise ValueError(f"{field_name} must be at least 1")
        if self.database_ready_interval_seconds < 0:
            raise ValueError("database_ready_interval_seconds must not be negative")
        if self.tenant_scan_timeout_seconds <= 0:
            raise ValueError("tenant_scan_timeout_seconds must be positive")
        if not 4 <= self.password_hash_rounds <= 31:
            raise ValueError("password_hash_rounds must be between 4 and 31 (bcrypt cost)")
        return self

    @property
    def is_postgres(self) -> bool:
        return self.database_driver.startswith("postgresql")

    @property
    def is_sqlite(self) -> bool:
        return self.database_driver.startswith("sqlite")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow", case_sensitive=False
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
