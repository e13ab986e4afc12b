"""
Base repository.

Repositories wrap an ``AsyncSession`` and expose named queries. They flush
but never commit; the unit of work belongs to the caller.
"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from warden.models.security import SortDirection


LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_ignore_case(column, text: str):
    return func.lower(column).like(f"%{escape_like(text.lower())}%", escape=LIKE_ESCAPE)


def equals_ignore_case(column, text: str):
    return func.lower(column) == text.lower()


def ordered(column, sort_direction: SortDirection | None):
    if sort_direction == SortDirection.DESCENDING:
        return column.desc()
    return column.asc()


class BaseRepository:
    model: Any = None

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, entity_id) -> Any | None:
        return await self.db.get(self.model, entity_id)

    async def exists_by_id(self, entity_id) -> bool:
        return await self.get(entity_id) is not None

    async def add(self, entity):
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def save(self, entity):
        await self.db.flush()
        return entity

    async def _scalars(self, stmt: Select) -> list:
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _first(self, stmt: Select):
        result = await self.db.execute(stmt.limit(1))
        return result.scalars().first()

    async def _count(self, stmt: Select) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )
        return result.scalar_one()

    async def _exists(self, stmt: Select) -> bool:
        return await self._first(stmt) is not None
