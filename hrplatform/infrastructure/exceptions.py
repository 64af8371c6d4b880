"""
Infrastructure exceptions for the HR platform control plane.

This module defines infrastructure-level exceptions related to
database creation, schema application, and tenant connections.
"""

from hrplatform.domain.exceptions import PlatformException


# Database provisioning exceptions
class DatabaseProvisioningError(PlatformException):
    """Creating or dropping a tenant database failed."""

    def __init__(self, db_name: str, reason: str):
        super().__init__(
            f"Failed to provision database: {db_name}",
            "DATABASE_PROVISIONING_ERROR",
            {"db_name": db_name, "reason": reason},
        )


class InvalidDatabaseNameError(DatabaseProvisioningError):
    """Database name is not safe to use as an identifier."""

    def __init__(self, db_name: str):
        super().__init__(db_name, "name must match [a-z0-9_] and be at most 63 characters")
        self.error_code = "INVALID_DATABASE_NAME"


class DatabaseNotReadyError(PlatformException):
    """Database did not accept connections within the readiness budget."""

    def __init__(self, db_name: str, attempts: int, reason: str):
        super().__init__(
            f"Database {db_name} not ready after {attempts} attempts",
            "DATABASE_NOT_READY",
            {"db_name": db_name, "attempts": attempts, "reason": reason},
        )


# Schema exceptions
class SchemaModuleError(PlatformException):
    """Applying one tenant schema module failed."""

    def __init__(self, module: str, reason: str):
        self.module = module
        super().__init__(
            f"Error creating {module}: {reason}",
            "SCHEMA_MODULE_ERROR",
            {"module": module, "reason": reason},
        )


class SchemaModuleOrderError(PlatformException):
    """A schema module references a table from a later tier."""

    def __init__(self, module: str, table: str, referenced_table: str):
        super().__init__(
            f"Module {module}: table {table} references {referenced_table} "
            f"which is not created before it",
            "SCHEMA_MODULE_ORDER_ERROR",
            {"module": module, "table": table, "referenced_table": referenced_table},
        )
