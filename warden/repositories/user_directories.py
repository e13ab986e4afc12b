from uuid import UUID

from sqlalchemy import delete, select

from warden.models.security import (
    SortDirection,
    UserDirectory,
    tenant_user_directory_association,
)
from .base import BaseRepository, contains_ignore_case, equals_ignore_case, ordered


class UserDirectoryRepository(BaseRepository):
    model = UserDirectory

    async def exists_by_name_ignore_case(self, name: str) -> bool:
        return await self._exists(
            select(UserDirectory.user_directory_id).where(
                equals_ignore_case(UserDirectory.name, name)
            )
        )

    async def get_name_by_id(self, user_directory_id: UUID) -> str | None:
        return await self._first(
            select(UserDirectory.name).where(
                UserDirectory.user_directory_id == user_directory_id
            )
        )

    async def get_type_for_user_directory_id(self, user_directory_id: UUID) -> str | None:
        return await self._first(
            select(UserDirectory.type).where(
                UserDirectory.user_directory_id == user_directory_id
            )
        )

    async def delete_by_id(self, user_directory_id: UUID) -> int:
        result = await self.db.execute(
            delete(UserDirectory).where(UserDirectory.user_directory_id == user_directory_id)
        )
        return result.rowcount

    async def find_all(self) -> list[UserDirectory]:
        return await self._scalars(select(UserDirectory).order_by(UserDirectory.name))

    async def find_by_tenant_id(self, tenant_id: UUID) -> list[UserDirectory]:
        return await self._scalars(
            select(UserDirectory)
            .join(
                tenant_user_directory_association,
                tenant_user_directory_association.c.user_directory_id
                == UserDirectory.user_directory_id,
            )
            .where(tenant_user_directory_association.c.tenant_id == tenant_id)
            .order_by(UserDirectory.name)
        )

    def _filtered(self, filter: str | None):
        stmt = select(UserDirectory)
        if filter:
            stmt = stmt.where(contains_ignore_case(UserDirectory.name, filter))
        return stmt

    async def find_filtered(
        self,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[UserDirectory]:
        stmt = (
            self._filtered(filter)
            .order_by(ordered(UserDirectory.name, sort_direction))
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._scalars(stmt)

    async def count_filtered(self, filter: str | None = None) -> int:
        return await self._count(self._filtered(filter))
