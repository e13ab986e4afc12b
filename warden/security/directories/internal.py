"""
Internal user directory.

Users and groups live in the security tables of the application database.
The password policy is driven by the directory parameters:

* ``MaxPasswordAttempts``: failed logins before the user is locked
* ``PasswordExpiryMonths``: lifetime of a newly set password
* ``PasswordHistoryMonths``: window in which old passwords cannot be reused
* ``MaxFilteredUsers`` / ``MaxFilteredGroups`` / ``MaxFilteredGroupMembers``:
  upper bound on page sizes
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from warden.config import settings
from warden.exceptions import (
    AuthenticationFailedError,
    DuplicateGroupError,
    DuplicateUserError,
    ExistingGroupMemberError,
    ExistingGroupMembersError,
    ExistingGroupRoleError,
    ExistingPasswordError,
    ExpiredPasswordError,
    GroupMemberNotFoundError,
    GroupNotFoundError,
    GroupRoleNotFoundError,
    InvalidArgumentError,
    RoleNotFoundError,
    UserLockedError,
    UserNotFoundError,
)
from warden.models.pydantic_models import (
    GroupMember,
    GroupMembers,
    GroupModel,
    GroupRole,
    Groups,
    UserDirectoryParameter,
    UserModel,
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
    UserStatus,
)
from warden.repositories import GroupRepository, RoleRepository, UserRepository
from warden.repositories.users import USER_ATTRIBUTE_COLUMNS
from warden.security.passwords import (
    generate_random_password,
    hash_password,
    verify_password,
)
from warden.utils import add_months, safe_int, utc_now
from .base import UserDirectoryCapabilities

logger = logging.getLogger(__name__)


class InternalUserDirectory:
    capabilities = UserDirectoryCapabilities(
        supports_admin_change_password=True,
        supports_change_password=True,
        supports_group_administration=True,
        supports_group_member_administration=True,
        supports_password_expiry=True,
        supports_password_history=True,
        supports_user_administration=True,
        supports_user_locks=True,
    )

    def __init__(
        self,
        user_directory_id: UUID,
        parameters: list[UserDirectoryParameter],
        db: AsyncSession,
    ):
        self.user_directory_id = user_directory_id
        self.db = db
        self.users = UserRepository(db)
        self.groups = GroupRepository(db)
        self.roles = RoleRepository(db)

        values = {parameter.name.lower(): parameter.value for parameter in parameters}

        def parameter(name: str, default: int) -> int:
            return safe_int(values.get(name.lower()), default)

        self.max_password_attempts = parameter(
            "MaxPasswordAttempts", settings.default_max_password_attempts
        )
        self.password_expiry_months = parameter(
            "PasswordExpiryMonths", settings.default_password_expiry_months
        )
        self.password_history_months = parameter(
            "PasswordHistoryMonths", settings.default_password_history_months
        )
        self.max_filtered_users = parameter(
            "MaxFilteredUsers", settings.default_max_filtered_users
        )
        self.max_filtered_groups = parameter(
            "MaxFilteredGroups", settings.default_max_filtered_groups
        )
        self.max_filtered_group_members = parameter(
            "MaxFilteredGroupMembers", settings.default_max_filtered_group_members
        )

    # ── helpers ────────────────────────────────────────────────────────

    def _new_password_expiry(self):
        return add_months(utc_now(), self.password_expiry_months)

    async def _require_user(self, username: str) -> User:
        user = await self.users.find_by_user_directory_id_and_username_ignore_case(
            self.user_directory_id, username
        )
        if user is None:
            raise UserNotFoundError(username)
        return user

    async def _require_user_id(self, username: str) -> UUID:
        user_id = await self.users.get_id_by_user_directory_id_and_username_ignore_case(
            self.user_directory_id, username
        )
        if user_id is None:
            raise UserNotFoundError(username)
        return user_id

    async def _require_group(self, group_name: str) -> Group:
        group = await self.groups.find_by_user_directory_id_and_name_ignore_case(
            self.user_directory_id, group_name
        )
        if group is None:
            raise GroupNotFoundError(group_name)
        return group

    async def _require_group_id(self, group_name: str) -> UUID:
        group_id = await self.groups.get_id_by_user_directory_id_and_name_ignore_case(
            self.user_directory_id, group_name
        )
        if group_id is None:
            raise GroupNotFoundError(group_name)
        return group_id

    async def _is_password_in_history(self, user_id: UUID, password: str) -> bool:
        after = add_months(utc_now(), -self.password_history_months)
        for historical_password in await self.users.get_password_history(user_id, after):
            if verify_password(password, historical_password):
                return True
        return False

    def _page(self, page_index: int | None, page_size: int | None, maximum: int):
        page_index = page_index or 0
        page_size = page_size or maximum
        limit = min(page_size, maximum)
        return page_index, page_size, page_index * limit, limit

    # ── passwords ──────────────────────────────────────────────────────

    async def authenticate(self, username: str, password: str) -> None:
        user = await self._require_user(username)

        if user.is_locked(self.max_password_attempts):
            raise UserLockedError(username)

        if not verify_password(password, user.password):
            if user.password_attempts is not None and user.password_attempts != -1:
                await self.users.increment_password_attempts(user.user_id)
            raise AuthenticationFailedError(username)

        if user.has_password_expired():
            raise ExpiredPasswordError(username)

    async def change_password(self, username: str, password: str, new_password: str) -> None:
        user = await self.users.find_by_user_directory_id_and_username_ignore_case(
            self.user_directory_id, username
        )
        if user is None:
            raise AuthenticationFailedError(username)

        if user.is_locked(self.max_password_attempts):
            raise UserLockedError(username)

        if not verify_password(password, user.password):
            raise AuthenticationFailedError(username)

        if await self._is_password_in_history(user.user_id, new_password):
            raise ExistingPasswordError(username)

        encoded_new_password = hash_password(new_password)
        await self.users.change_password(
            user.user_id, encoded_new_password, 0, self._new_password_expiry()
        )
        await self.users.save_password_in_password_history(user.user_id, encoded_new_password)

    async def admin_change_password(
        self,
        username: str,
        new_password: str,
        expire_password: bool,
        lock_user: bool,
        reset_password_history: bool,
        reason: PasswordChangeReason,
    ) -> None:
        user_id = await self._require_user_id(username)

        encoded_new_password = hash_password(new_password)
        password_attempts = self.max_password_attempts if lock_user else 0
        password_expiry = utc_now() if expire_password else self._new_password_expiry()

        await self.users.change_password(
            user_id, encoded_new_password, password_attempts, password_expiry
        )
        if reset_password_history:
            await self.users.reset_password_history(user_id)
        await self.users.save_password_in_password_history(user_id, encoded_new_password)

        logger.info(
            f"Changed the password for the user ({username}) in the user directory "
            f"({self.user_directory_id}) with reason ({reason.code})"
        )

    async def reset_password(self, username: str, new_password: str) -> None:
        user = await self._require_user(username)

        if user.is_locked(self.max_password_attempts):
            raise UserLockedError(username)

        if await self._is_password_in_history(user.user_id, new_password):
            raise ExistingPasswordError(username)

        encoded_new_password = hash_password(new_password)
        await self.users.change_password(
            user.user_id, encoded_new_password, 0, self._new_password_expiry()
        )
        await self.users.save_password_in_password_history(user.user_id, encoded_new_password)

    # ── users ──────────────────────────────────────────────────────────

    async def create_user(
        self, user: UserRequest, expired_password: bool, user_locked: bool
    ) -> User:
        if await self.users.exists_by_user_directory_id_and_username_ignore_case(
            self.user_directory_id, user.username
        ):
            raise DuplicateUserError(user.username)

        encoded_password = hash_password(user.password or generate_random_password())

        entity = User(
            user_directory_id=self.user_directory_id,
            username=user.username,
            name=user.name or "",
            preferred_name=user.preferred_name or "",
            email=user.email or "",
            phone_number=user.phone_number or "",
            mobile_number=user.mobile_number or "",
            password=encoded_password,
            password_attempts=self.max_password_attempts if user_locked else 0,
            password_expiry=utc_now() if expired_password else self._new_password_expiry(),
            status=user.status or UserStatus.ACTIVE,
        )
        await self.users.add(entity)
        await self.users.save_password_in_password_history(entity.user_id, encoded_password)
        return entity

    async def update_user(
        self, user: UserRequest, expire_password: bool, lock_user: bool
    ) -> User:
        existing = await self._require_user(user.username)

        for field in ("name", "preferred_name", "email", "phone_number", "mobile_number", "status"):
            value = getattr(user, field)
            if value is not None:
                setattr(existing, field, value)

        if user.password:
            existing.password = hash_password(user.password)

        if lock_user:
            existing.password_attempts = self.max_password_attempts
        elif user.password_attempts is not None:
            existing.password_attempts = user.password_attempts

        if expire_password:
            existing.password_expiry = utc_now()
        elif user.password_expiry is not None:
            existing.password_expiry = user.password_expiry

        return await self.users.save(existing)

    async def delete_user(self, username: str) -> None:
        user_id = await self._require_user_id(username)
        await self.users.delete_by_id(user_id)

    async def get_user(self, username: str) -> User:
        return await self._require_user(username)

    async def get_user_name(self, username: str) -> str:
        name = await self.users.get_name_by_user_directory_id_and_username_ignore_case(
            self.user_directory_id, username
        )
        if name is None:
            raise UserNotFoundError(username)
        return name

    async def get_users(
        self,
        filter: str | None = None,
        sort_by: UserSortBy | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Users:
        page_index, page_size, offset, limit = self._page(
            page_index, page_size, self.max_filtered_users
        )
        users = await self.users.find_filtered(
            self.user_directory_id, filter, sort_by, sort_direction, offset, limit
        )
        total = await self.users.count_filtered(self.user_directory_id, filter)
        return Users(
            user_directory_id=self.user_directory_id,
            users=[UserModel.model_validate(user) for user in users],
            total=total,
            filter=filter,
            sort_by=sort_by,
            sort_direction=sort_direction,
            page_index=page_index,
            page_size=page_size,
        )

    async def find_users(self, attributes: dict[str, str]) -> list[User]:
        for name in attributes:
            if name not in USER_ATTRIBUTE_COLUMNS:
                raise InvalidArgumentError(name)
        return await self.users.find_by_attributes(self.user_directory_id, attributes)

    async def is_existing_user(self, username: str) -> bool:
        return await self.users.exists_by_user_directory_id_and_username_ignore_case(
            self.user_directory_id, username
        )

    # ── groups ─────────────────────────────────────────────────────────

    async def create_group(self, group: GroupModel) -> Group:
        if await self.groups.exists_by_user_directory_id_and_name_ignore_case(
            self.user_directory_id, group.name
        ):
            raise DuplicateGroupError(group.name)

        return await self.groups.add(
            Group(
                user_directory_id=self.user_directory_id,
                name=group.name,
                description=group.description or "",
            )
        )

    async def update_group(self, group: GroupModel) -> Group:
        existing = await self._require_group(group.name)
        existing.description = group.description or ""
        return await self.groups.save(existing)

    async def delete_group(self, group_name: str) -> None:
        group_id = await self._require_group_id(group_name)
        if await self.groups.get_number_of_users_for_group(group_id) > 0:
            raise ExistingGroupMembersError(group_name)
        await self.groups.delete_by_id(group_id)

    async def get_group(self, group_name: str) -> Group:
        return await self._require_group(group_name)

    async def get_group_names(self) -> list[str]:
        return await self.groups.get_names_by_user_directory_id(self.user_directory_id)

    async def get_groups(
        self,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Groups:
        page_index, page_size, offset, limit = self._page(
            page_index, page_size, self.max_filtered_groups
        )
        groups = await self.groups.find_filtered(
            self.user_directory_id, filter, sort_direction, offset, limit
        )
        total = await self.groups.count_filtered(self.user_directory_id, filter)
        return Groups(
            user_directory_id=self.user_directory_id,
            groups=[GroupModel.model_validate(group) for group in groups],
            total=total,
            filter=filter,
            sort_direction=sort_direction,
            page_index=page_index,
            page_size=page_size,
        )

    async def get_groups_for_user(self, username: str) -> list[Group]:
        user_id = await self._require_user_id(username)
        return await self.users.get_groups_by_user_id(user_id)

    async def get_group_names_for_user(self, username: str) -> list[str]:
        user_id = await self._require_user_id(username)
        return await self.users.get_group_names_by_user_id(user_id)

    # ── membership ─────────────────────────────────────────────────────

    async def add_user_to_group(self, group_name: str, username: str) -> None:
        group_id = await self._require_group_id(group_name)
        user_id = await self._require_user_id(username)
        if await self.groups.user_to_group_mapping_exists(group_id, user_id):
            return
        await self.groups.add_user_to_group(group_id, user_id)

    async def remove_user_from_group(self, group_name: str, username: str) -> None:
        group_id = await self._require_group_id(group_name)
        user_id = await self._require_user_id(username)
        await self.groups.remove_user_from_group(group_id, user_id)

    async def add_member_to_group(
        self, group_name: str, member_type: GroupMemberType, member_name: str
    ) -> None:
        if member_type != GroupMemberType.USER:
            raise InvalidArgumentError("memberType")

        group_id = await self._require_group_id(group_name)
        user_id = await self._require_user_id(member_name)
        if await self.groups.user_to_group_mapping_exists(group_id, user_id):
            raise ExistingGroupMemberError(group_name, member_name)
        await self.groups.add_user_to_group(group_id, user_id)

    async def remove_member_from_group(
        self, group_name: str, member_type: GroupMemberType, member_name: str
    ) -> None:
        if member_type != GroupMemberType.USER:
            raise InvalidArgumentError("memberType")

        group_id = await self._require_group_id(group_name)
        user_id = await self.users.get_id_by_user_directory_id_and_username_ignore_case(
            self.user_directory_id, member_name
        )
        if user_id is None or not await self.groups.remove_user_from_group(group_id, user_id):
            raise GroupMemberNotFoundError(group_name, member_name)

    async def get_members_for_group(
        self,
        group_name: str,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> GroupMembers:
        group_id = await self._require_group_id(group_name)
        page_index, page_size, offset, limit = self._page(
            page_index, page_size, self.max_filtered_group_members
        )
        usernames = await self.groups.get_usernames_for_group(
            self.user_directory_id, group_id, filter, sort_direction, offset, limit
        )
        total = await self.groups.count_usernames_for_group(
            self.user_directory_id, group_id, filter
        )
        return GroupMembers(
            user_directory_id=self.user_directory_id,
            group_name=group_name,
            group_members=[
                GroupMember(
                    user_directory_id=self.user_directory_id,
                    group_name=group_name,
                    member_type=GroupMemberType.USER,
                    member_name=username,
                )
                for username in usernames
            ],
            total=total,
            filter=filter,
            sort_direction=sort_direction,
            page_index=page_index,
            page_size=page_size,
        )

    async def is_user_in_group(self, group_name: str, username: str) -> bool:
        group_id = await self._require_group_id(group_name)
        user_id = await self._require_user_id(username)
        return await self.groups.user_to_group_mapping_exists(group_id, user_id)

    # ── roles ──────────────────────────────────────────────────────────

    async def add_role_to_group(self, group_name: str, role_code: str) -> None:
        group_id = await self._require_group_id(group_name)
        if not await self.roles.exists_by_id(role_code):
            raise RoleNotFoundError(role_code)
        if await self.groups.role_to_group_mapping_exists(group_id, role_code):
            raise ExistingGroupRoleError(group_name, role_code)
        await self.groups.add_role_to_group(group_id, role_code)

    async def remove_role_from_group(self, group_name: str, role_code: str) -> None:
        group_id = await self._require_group_id(group_name)
        if not await self.groups.remove_role_from_group(group_id, role_code):
            raise GroupRoleNotFoundError(group_name, role_code)

    async def get_roles_for_group(self, group_name: str) -> list[GroupRole]:
        group_id = await self._require_group_id(group_name)
        return [
            GroupRole(
                user_directory_id=self.user_directory_id,
                group_name=group_name,
                role_code=role_code,
            )
            for role_code in await self.groups.get_role_codes_by_group_id(group_id)
        ]

    async def get_role_codes_for_group(self, group_name: str) -> list[str]:
        group_id = await self._require_group_id(group_name)
        return await self.groups.get_role_codes_by_group_id(group_id)

    async def get_function_codes_for_user(self, username: str) -> list[str]:
        user_id = await self._require_user_id(username)
        return await self.users.get_function_codes_by_user_id(user_id)

    async def get_role_codes_for_user(self, username: str) -> list[str]:
        user_id = await self._require_user_id(username)
        return await self.users.get_role_codes_by_user_id(user_id)
