from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, or_, select, update

from warden.models.security import (
    Function,
    Group,
    Role,
    SortDirection,
    User,
    UserPasswordHistory,
    UserSortBy,
    function_role_association,
    role_group_association,
    user_group_association,
)
from warden.utils import utc_now
from .base import BaseRepository, contains_ignore_case, equals_ignore_case, ordered

USER_SORT_COLUMNS = {
    UserSortBy.NAME: User.name,
    UserSortBy.PREFERRED_NAME: User.preferred_name,
    UserSortBy.USERNAME: User.username,
}

USER_ATTRIBUTE_COLUMNS = {
    "email": User.email,
    "mobile_number": User.mobile_number,
    "name": User.name,
    "phone_number": User.phone_number,
    "preferred_name": User.preferred_name,
    "username": User.username,
}


class UserRepository(BaseRepository):
    model = User

    def _by_username(self, user_directory_id: UUID, username: str):
        return (
            User.user_directory_id == user_directory_id,
            equals_ignore_case(User.username, username),
        )

    async def find_by_user_directory_id_and_username_ignore_case(
        self, user_directory_id: UUID, username: str
    ) -> User | None:
        return await self._first(
            select(User).where(*self._by_username(user_directory_id, username))
        )

    async def get_id_by_user_directory_id_and_username_ignore_case(
        self, user_directory_id: UUID, username: str
    ) -> UUID | None:
        return await self._first(
            select(User.user_id).where(*self._by_username(user_directory_id, username))
        )

    async def exists_by_user_directory_id_and_username_ignore_case(
        self, user_directory_id: UUID, username: str
    ) -> bool:
        return (
            await self.get_id_by_user_directory_id_and_username_ignore_case(
                user_directory_id, username
            )
            is not None
        )

    async def exists_by_user_directory_id(self, user_directory_id: UUID) -> bool:
        return await self._exists(
            select(User.user_id).where(User.user_directory_id == user_directory_id)
        )

    async def get_user_directory_id_by_username_ignore_case(self, username: str) -> UUID | None:
        return await self._first(
            select(User.user_directory_id).where(equals_ignore_case(User.username, username))
        )

    async def get_name_by_user_directory_id_and_username_ignore_case(
        self, user_directory_id: UUID, username: str
    ) -> str | None:
        return await self._first(
            select(User.name).where(*self._by_username(user_directory_id, username))
        )

    async def delete_by_id(self, user_id: UUID) -> int:
        result = await self.db.execute(delete(User).where(User.user_id == user_id))
        return result.rowcount

    # ── authorities ────────────────────────────────────────────────────

    async def get_function_codes_by_user_id(self, user_id: UUID) -> list[str]:
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
            .join(
                user_group_association,
                user_group_association.c.group_id == role_group_association.c.group_id,
            )
            .where(user_group_association.c.user_id == user_id)
            .order_by(Function.code)
        )
        return await self._scalars(stmt)

    async def get_role_codes_by_user_id(self, user_id: UUID) -> list[str]:
        stmt = (
            select(Role.code)
            .distinct()
            .join(role_group_association, role_group_association.c.role_code == Role.code)
            .join(
                user_group_association,
                user_group_association.c.group_id == role_group_association.c.group_id,
            )
            .where(user_group_association.c.user_id == user_id)
            .order_by(Role.code)
        )
        return await self._scalars(stmt)

    async def get_groups_by_user_id(self, user_id: UUID) -> list[Group]:
        stmt = (
            select(Group)
            .join(user_group_association, user_group_association.c.group_id == Group.group_id)
            .where(user_group_association.c.user_id == user_id)
            .order_by(Group.name)
        )
        return await self._scalars(stmt)

    async def get_group_names_by_user_id(self, user_id: UUID) -> list[str]:
        return [group.name for group in await self.get_groups_by_user_id(user_id)]

    # ── passwords ──────────────────────────────────────────────────────

    async def change_password(
        self,
        user_id: UUID,
        password: str,
        password_attempts: int,
        password_expiry: datetime | None,
    ) -> int:
        result = await self.db.execute(
            update(User)
            .where(User.user_id == user_id)
            .values(
                password=password,
                password_attempts=password_attempts,
                password_expiry=password_expiry,
            )
        )
        return result.rowcount

    async def increment_password_attempts(self, user_id: UUID) -> int:
        result = await self.db.execute(
            update(User)
            .where(User.user_id == user_id)
            .values(password_attempts=User.password_attempts + 1)
        )
        return result.rowcount

    async def save_password_in_password_history(self, user_id: UUID, password: str) -> None:
        self.db.add(UserPasswordHistory(user_id=user_id, changed=utc_now(), password=password))
        await self.db.flush()

    async def get_password_history(self, user_id: UUID, after: datetime) -> list[str]:
        stmt = (
            select(UserPasswordHistory.password)
            .where(UserPasswordHistory.user_id == user_id)
            .where(UserPasswordHistory.changed > after)
            .order_by(UserPasswordHistory.changed.desc())
        )
        return await self._scalars(stmt)

    async def reset_password_history(self, user_id: UUID) -> None:
        await self.db.execute(
            delete(UserPasswordHistory).where(UserPasswordHistory.user_id == user_id)
        )

    # ── listing ────────────────────────────────────────────────────────

    def _filtered(self, user_directory_id: UUID, filter: str | None):
        stmt = select(User).where(User.user_directory_id == user_directory_id)
        if filter:
            stmt = stmt.where(
                or_(
                    contains_ignore_case(User.username, filter),
                    contains_ignore_case(User.name, filter),
                    contains_ignore_case(User.preferred_name, filter),
                )
            )
        return stmt

    async def find_filtered(
        self,
        user_directory_id: UUID,
        filter: str | None = None,
        sort_by: UserSortBy | None = None,
        sort_direction: SortDirection | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[User]:
        column = USER_SORT_COLUMNS.get(sort_by or UserSortBy.NAME, User.name)
        stmt = (
            self._filtered(user_directory_id, filter)
            .order_by(ordered(column, sort_direction))
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._scalars(stmt)

    async def count_filtered(self, user_directory_id: UUID, filter: str | None = None) -> int:
        return await self._count(self._filtered(user_directory_id, filter))

    async def find_by_attributes(
        self, user_directory_id: UUID, attributes: dict[str, str]
    ) -> list[User]:
        """Users whose attributes all contain the given values (case-insensitive).

        Callers validate attribute names against ``USER_ATTRIBUTE_COLUMNS``.
        """
        stmt = select(User).where(User.user_directory_id == user_directory_id)
        for name, value in attributes.items():
            stmt = stmt.where(contains_ignore_case(USER_ATTRIBUTE_COLUMNS[name], value))
        return await self._scalars(stmt.order_by(User.username))
