from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hrplatform.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Catalog repository over one AsyncSession.

    Writes are flushed so generated ids and server defaults are readable
    right away, but never committed: TenantCatalog decides when a state
    change becomes durable.

    Subclasses set `model`.
    """

    model: type[ModelType]

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, id: str) -> ModelType | None:
        # populate_existing: status columns may have changed since the row was first loaded
        return await self.db.get(self.model, id, populate_existing=True)

    async def get_all(self, *order_by: Any) -> list[ModelType]:
        result = await self.db.execute(select(self.model).order_by(*order_by))
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        return await self._flush_and_reload(obj)

    async def update(self, obj: ModelType) -> ModelType:
        return await self._flush_and_reload(obj)

    async def _flush_and_reload(self, obj: ModelType) -> ModelType:
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
