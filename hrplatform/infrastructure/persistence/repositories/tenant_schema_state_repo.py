from sqlalchemy import select

from hrplatform.infrastructure.persistence.models.tenant_schema_state import \
    TenantSchemaState
from hrplatform.infrastructure.persistence.repositories.base import BaseRepository


class TenantSchemaStateRepository(BaseRepository[TenantSchemaState]):
    model = TenantSchemaState

    async def get_by_tenant(self, tenant_id: str) -> TenantSchemaState | None:
        result = await self.db.execute(
            select(TenantSchemaState).where(TenantSchemaState.tenant_id == tenant_id)
        )
        return result.scalar_one_or_none()

    async def upsert(
        self, tenant_id: str, schema_version: str, last_applied_module: str
    ) -> TenantSchemaState:
        """Create or update the schema state row for a tenant"""
        state = await self.get_by_tenant(tenant_id)
        if state is None:
            return await self.create(
                TenantSchemaState(
                    tenant_id=tenant_id,
                    schema_version=schema_version,
                    last_applied_module=last_applied_module,
                )
            )
        state.schema_version = schema_version
        state.last_applied_module = last_applied_module
        return await self.update(state)
