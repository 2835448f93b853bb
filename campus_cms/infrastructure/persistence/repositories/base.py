"""Base repository: generic lookups, add/delete and paginated list+count."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_cms.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, add, delete and list/count helpers.

    Subclasses map ORM rows to DTOs and build their own filter predicates;
    _page and _count take the same condition list so a paginated list and
    its total can never disagree.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        """Return a single record by primary key, or None."""
        return await self.db.get(self.model, entity_id)

    async def add(self, obj: ModelType) -> ModelType:
        """Persist a new record and load server-generated columns."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush changes to an attached record and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()

    async def _page(
        self,
        conditions: Sequence[ColumnElement[bool]],
        order_by: Sequence[Any],
        *,
        offset: int,
        limit: int,
    ) -> list[ModelType]:
        stmt = select(self.model).where(*conditions).order_by(*order_by)
        stmt = stmt.offset(offset).limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _count(self, conditions: Sequence[ColumnElement[bool]]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*conditions)
        result = await self.db.execute(stmt)
        return int(result.scalar_one())

    async def _all(self, order_by: Sequence[Any], limit: int | None = None) -> list[ModelType]:
        stmt = select(self.model).order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
