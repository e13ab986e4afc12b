from uuid import UUID

from sqlalchemy import delete, func, insert, select

from warden.models.security import (
    Function,
    Group,
    SortDirection,
    User,
    function_role_association,
    role_group_association,
    user_group_association,
)
from .base import BaseRepository, contains_ignore_case, equals_ignore_case, ordered


class GroupRepository(BaseRepository):
    model = Group

    def _by_name(self, user_directory_id: UUID, name: str):
        return (
            Group.user_directory_id == user_directory_id,
            equals_ignore_case(Group.name, name),
        )

    async def delete_by_id(self, group_id: UUID) -> int:
        result = await self.db.execute(delete(Group).where(Group.group_id == group_id))
        return result.rowcount

    async def exists_by_user_directory_id(self, user_directory_id: UUID) -> bool:
        return await self._exists(
            select(Group.group_id).where(Group.user_directory_id == user_directory_id)
        )

    async def exists_by_user_directory_id_and_name_ignore_case(
        self, user_directory_id: UUID, name: str
    ) -> bool:
        return await self._exists(
            select(Group.group_id).where(*self._by_name(user_directory_id, name))
        )

    async def find_by_user_directory_id_and_name_ignore_case(
        self, user_directory_id: UUID, name: str
    ) -> Group | None:
        return await self._first(select(Group).where(*self._by_name(user_directory_id, name)))

    async def get_id_by_user_directory_id_and_name_ignore_case(
        self, user_directory_id: UUID, name: str
    ) -> UUID | None:
        return await self._first(
            select(Group.group_id).where(*self._by_name(user_directory_id, name))
        )

    async def find_by_user_directory_id(self, user_directory_id: UUID) -> list[Group]:
        return await self._scalars(
            select(Group)
            .where(Group.user_directory_id == user_directory_id)
            .order_by(Group.name)
        )

    async def get_names_by_user_directory_id(self, user_directory_id: UUID) -> list[str]:
        return await self._scalars(
            select(Group.name)
            .where(Group.user_directory_id == user_directory_id)
            .order_by(Group.name)
        )

    def _filtered(self, user_directory_id: UUID, filter: str | None):
        stmt = select(Group).where(Group.user_directory_id == user_directory_id)
        if filter:
            stmt = stmt.where(contains_ignore_case(Group.name, filter))
        return stmt

    async def find_filtered(
        self,
        user_directory_id: UUID,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Group]:
        stmt = (
            self._filtered(user_directory_id, filter)
            .order_by(ordered(Group.name, sort_direction))
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._scalars(stmt)

    async def count_filtered(self, user_directory_id: UUID, filter: str | None = None) -> int:
        return await self._count(self._filtered(user_directory_id, filter))

    # ── roles ──────────────────────────────────────────────────────────

    async def add_role_to_group(self, group_id: UUID, role_code: str) -> None:
        await self.db.execute(
            insert(role_group_association).values(group_id=group_id, role_code=role_code)
        )

    async def remove_role_from_group(self, group_id: UUID, role_code: str) -> int:
        result = await self.db.execute(
            delete(role_group_association).where(
                role_group_association.c.group_id == group_id,
                role_group_association.c.role_code == role_code,
            )
        )
        return result.rowcount

    async def role_to_group_mapping_exists(self, group_id: UUID, role_code: str) -> bool:
        return await self._exists(
            select(role_group_association.c.role_code).where(
                role_group_association.c.group_id == group_id,
                role_group_association.c.role_code == role_code,
            )
        )

    async def get_role_codes_by_group_id(self, group_id: UUID) -> list[str]:
        return await self._scalars(
            select(role_group_association.c.role_code)
            .where(role_group_association.c.group_id == group_id)
            .order_by(role_group_association.c.role_code)
        )

    async def get_function_codes_by_user_directory_id_and_group_names(
        self, user_directory_id: UUID, group_names: list[str]
    ) -> list[str]:
        if not group_names:
            return []
        stmt = (
            select(Function.code)
            .distinct()
            .join(
                function_role_association,
                function_role_association.c.function_code == Function.code,
            )
            .join(
                role_group_association,
                role_group_association.c.role_code == function_role_association.c.role_code,
            )
            .join(Group, Group.group_id == role_group_association.c.group_id)
            .where(Group.user_directory_id == user_directory_id)
            .where(func.lower(Group.name).in_([name.lower() for name in group_names]))
            .order_by(Function.code)
        )
        return await self._scalars(stmt)

    async def get_role_codes_by_user_directory_id_and_group_names(
        self, user_directory_id: UUID, group_names: list[str]
    ) -> list[str]:
        if not group_names:
            return []
        stmt = (
            select(role_group_association.c.role_code)
            .distinct()
            .join(Group, Group.group_id == role_group_association.c.group_id)
            .where(Group.user_directory_id == user_directory_id)
            .where(func.lower(Group.name).in_([name.lower() for name in group_names]))
            .order_by(role_group_association.c.role_code)
        )
        return await self._scalars(stmt)

    # ── members ────────────────────────────────────────────────────────

    async def add_user_to_group(self, group_id: UUID, user_id: UUID) -> None:
        await self.db.execute(
            insert(user_group_association).values(group_id=group_id, user_id=user_id)
        )

    async def remove_user_from_group(self, group_id: UUID, user_id: UUID) -> int:
        result = await self.db.execute(
            delete(user_group_association).where(
                user_group_association.c.group_id == group_id,
                user_group_association.c.user_id == user_id,
            )
        )
        return result.rowcount

    async def user_to_group_mapping_exists(self, group_id: UUID, user_id: UUID) -> bool:
        return await self._exists(
            select(user_group_association.c.user_id).where(
                user_group_association.c.group_id == group_id,
                user_group_association.c.user_id == user_id,
            )
        )

    async def get_number_of_users_for_group(self, group_id: UUID) -> int:
        return await self._count(
            select(user_group_association.c.user_id).where(
                user_group_association.c.group_id == group_id
            )
        )

    def _usernames(self, user_directory_id: UUID, group_id: UUID, filter: str | None):
        stmt = (
            select(User.username)
            .join(user_group_association, user_group_association.c.user_id == User.user_id)
            .where(User.user_directory_id == user_directory_id)
            .where(user_group_association.c.group_id == group_id)
        )
        if filter:
            stmt = stmt.where(contains_ignore_case(User.username, filter))
        return stmt

    async def get_usernames_for_group(
        self,
        user_directory_id: UUID,
        group_id: UUID,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[str]:
        stmt = (
            self._usernames(user_directory_id, group_id, filter)
            .order_by(ordered(User.username, sort_direction))
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._scalars(stmt)

    async def count_usernames_for_group(
        self, user_directory_id: UUID, group_id: UUID, filter: str | None = None
    ) -> int:
        return await self._count(self._usernames(user_directory_id, group_id, filter))
