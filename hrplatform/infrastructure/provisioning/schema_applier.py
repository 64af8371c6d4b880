"""
Tenant schema application.

Applies the tenant schema modules to a freshly created tenant database:
1. Validate that module order satisfies every foreign key
2. For each module, in its own transaction:
   - create its tables (skipping ones that exist)
   - run its seeds (inserting only missing rows)

Re-applying to a database that is already complete is a no-op.
"""
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError

from hrplatform.infrastructure.config.settings import Settings
from hrplatform.infrastructure.exceptions import SchemaModuleError
from hrplatform.infrastructure.persistence.database import TenantConnectionFactory
from hrplatform.infrastructure.persistence.tenant_schema.base import TenantBase
from hrplatform.infrastructure.persistence.tenant_schema.registry import (
    SCHEMA_VERSION, TENANT_SCHEMA_MODULES, SchemaModule, ordered_modules,
    validate_module_order)
from hrplatform.infrastructure.provisioning.base import validate_database_name
from hrplatform.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ModuleApplyResult:
    """Outcome of applying one schema module"""

    name: str
    tables: list[str]
    seed_rows_inserted: dict[str, int] = field(default_factory=dict)


@dataclass
class SchemaApplyResult:
    """Outcome of applying the whole tenant schema"""

    schema_version: str
    modules: list[ModuleApplyResult] = field(default_factory=list)

    @property
    def last_applied_module(self) -> str | None:
        return self.modules[-1].name if self.modules else None

    @property
    def seed_rows_inserted(self) -> int:
        return sum(sum(module.seed_rows_inserted.values()) for module in self.modules)


class TenantSchemaApplier:
    """Creates tenant tables and seed data module by module"""

    def __init__(
        self,
        settings: Settings,
        connections: TenantConnectionFactory | None = None,
        modules: Sequence[SchemaModule] = TENANT_SCHEMA_MODULES,
        schema_version: str = SCHEMA_VERSION,
    ):
        self.settings = settings
        self.connections = connections or TenantConnectionFactory(settings)
        self.modules = ordered_modules(modules)
        self.schema_version = schema_version

    async def apply(self, db_name: str) -> SchemaApplyResult:
        """
        Apply every module to the tenant database.

        Modules already applied stay committed when a later module fails.

        Raises:
            SchemaModuleOrderError: if a module references a later tier
            SchemaModuleError: naming the module that failed
        """
        validate_database_name(db_name)
        validate_module_order(self.modules)
        result = SchemaApplyResult(schema_version=self.schema_version)

        async with self.connections.engine(db_name) as engine:
            for module in self.modules:
                logger.info(f"Creating {module.name} for {db_name}")
                try:
                    async with engine.begin() as conn:
                        await conn.run_sync(
                            TenantBase.metadata.create_all,
                            tables=list(module.tables),
                            checkfirst=True,
                        )
                        module_result = ModuleApplyResult(
                            name=module.name, tables=module.table_names
                        )
                        for seed in module.seeds:
                            module_result.seed_rows_inserted[seed.name] = await seed.apply(conn)
                except (SQLAlchemyError, OSError) as e:
                    logger.error(f"Error creating {module.name} for {db_name}: {e}")
                    raise SchemaModuleError(module.name, str(e)) from e

                result.modules.append(module_result)

        logger.info(
            f"Schema {self.schema_version} applied to {db_name}: "
            f"{len(result.modules)} modules, {result.seed_rows_inserted} seed rows inserted"
        )
        return result
