from sqlalchemy import delete, select

from warden.models.security import Policy, PolicySortBy, SortDirection
from .base import BaseRepository, contains_ignore_case, ordered


class PolicyRepository(BaseRepository):
    model = Policy

    async def get_name_by_id(self, policy_id: str) -> str | None:
        return await self._first(select(Policy.name).where(Policy.policy_id == policy_id))

    async def delete_by_id(self, policy_id: str) -> int:
        result = await self.db.execute(delete(Policy).where(Policy.policy_id == policy_id))
        return result.rowcount

    async def find_all(self) -> list[Policy]:
        return await self._scalars(select(Policy).order_by(Policy.name))

    def _filtered(self, filter: str | None):
        stmt = select(Policy)
        if filter:
            stmt = stmt.where(contains_ignore_case(Policy.name, filter))
        return stmt

    async def find_filtered(
        self,
        filter: str | None = None,
        sort_by: PolicySortBy | None = None,
        sort_direction: SortDirection | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Policy]:
        column = Policy.type if sort_by == PolicySortBy.TYPE else Policy.name
        stmt = self._filtered(filter).order_by(ordered(column, sort_direction)).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._scalars(stmt)

    async def count_filtered(self, filter: str | None = None) -> int:
        return await self._count(self._filtered(filter))
