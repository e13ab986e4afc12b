"""
User directory provider contract.

A user directory is a pluggable identity store. The security service looks
up the directory type of a ``UserDirectory`` row in the registry and builds
a provider for it on every call; providers hold no state beyond their
parameters and the session they were given.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from warden.models.pydantic_models import (
    GroupMembers,
    GroupModel,
    GroupRole,
    Groups,
    UserDirectoryParameter,
    UserRequest,
    Users,
)
from warden.models.security import (
    Group,
    GroupMemberType,
    PasswordChangeReason,
    SortDirection,
    User,
    UserSortBy,
)


@dataclass(frozen=True)
class UserDirectoryCapabilities:
    supports_admin_change_password: bool = False
    supports_change_password: bool = False
    supports_group_administration: bool = False
    supports_group_member_administration: bool = False
    supports_password_expiry: bool = False
    supports_password_history: bool = False
    supports_user_administration: bool = False
    supports_user_locks: bool = False


@runtime_checkable
class UserDirectoryProvider(Protocol):
    user_directory_id: UUID
    capabilities: UserDirectoryCapabilities

    def __init__(
        self,
        user_directory_id: UUID,
        parameters: list[UserDirectoryParameter],
        db: AsyncSession,
    ) -> None: ...

    # users
    async def authenticate(self, username: str, password: str) -> None: ...

    async def change_password(self, username: str, password: str, new_password: str) -> None: ...

    async def admin_change_password(
        self,
        username: str,
        new_password: str,
        expire_password: bool,
        lock_user: bool,
        reset_password_history: bool,
        reason: PasswordChangeReason,
    ) -> None: ...

    async def reset_password(self, username: str, new_password: str) -> None: ...

    async def create_user(
        self, user: UserRequest, expired_password: bool, user_locked: bool
    ) -> User: ...

    async def update_user(
        self, user: UserRequest, expire_password: bool, lock_user: bool
    ) -> User: ...

    async def delete_user(self, username: str) -> None: ...

    async def get_user(self, username: str) -> User: ...

    async def get_users(
        self,
        filter: str | None,
        sort_by: UserSortBy | None,
        sort_direction: SortDirection | None,
        page_index: int | None,
        page_size: int | None,
    ) -> Users: ...

    async def find_users(self, attributes: dict[str, str]) -> list[User]: ...

    async def is_existing_user(self, username: str) -> bool: ...

    async def get_user_name(self, username: str) -> str: ...

    # groups
    async def create_group(self, group: GroupModel) -> Group: ...

    async def update_group(self, group: GroupModel) -> Group: ...

    async def delete_group(self, group_name: str) -> None: ...

    async def get_group(self, group_name: str) -> Group: ...

    async def get_group_names(self) -> list[str]: ...

    async def get_groups(
        self,
        filter: str | None,
        sort_direction: SortDirection | None,
        page_index: int | None,
        page_size: int | None,
    ) -> Groups: ...

    async def get_groups_for_user(self, username: str) -> list[Group]: ...

    async def get_group_names_for_user(self, username: str) -> list[str]: ...

    # membership
    async def add_user_to_group(self, group_name: str, username: str) -> None: ...

    async def remove_user_from_group(self, group_name: str, username: str) -> None: ...

    async def add_member_to_group(
        self, group_name: str, member_type: GroupMemberType, member_name: str
    ) -> None: ...

    async def remove_member_from_group(
        self, group_name: str, member_type: GroupMemberType, member_name: str
    ) -> None: ...

    async def get_members_for_group(
        self,
        group_name: str,
        filter: str | None,
        sort_direction: SortDirection | None,
        page_index: int | None,
        page_size: int | None,
    ) -> GroupMembers: ...

    async def is_user_in_group(self, group_name: str, username: str) -> bool: ...

    # roles
    async def add_role_to_group(self, group_name: str, role_code: str) -> None: ...

    async def remove_role_from_group(self, group_name: str, role_code: str) -> None: ...

    async def get_roles_for_group(self, group_name: str) -> list[GroupRole]: ...

    async def get_role_codes_for_group(self, group_name: str) -> list[str]: ...

    async def get_function_codes_for_user(self, username: str) -> list[str]: ...

    async def get_role_codes_for_user(self, username: str) -> list[str]: ...
