"""
Security service.

One instance per ``AsyncSession``. Read operations return ORM entities or
paged DTOs; every mutating operation commits its own unit of work. Domain
errors propagate unchanged, database failures surface as
``ServiceUnavailableError``.
"""

import functools
import logging
import uuid
from datetime import date
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from warden.config import default_internal_user_directory_parameters, settings
from warden.exceptions import (
    AuthenticationFailedError,
    DuplicateFunctionError,
    DuplicatePolicyError,
    DuplicateRoleError,
    DuplicateTenantError,
    DuplicateUserDirectoryError,
    ExistingGroupsError,
    ExistingTenantUserDirectoryError,
    ExistingUsersError,
    FunctionNotFoundError,
    InvalidArgumentError,
    InvalidSecurityCodeError,
    PolicyNotFoundError,
    RoleNotFoundError,
    SecurityServiceError,
    ServiceUnavailableError,
    TenantNotFoundError,
    TenantUserDirectoryNotFoundError,
    TokenNotFoundError,
    UserDirectoryNotFoundError,
    UserNotFoundError,
)
from warden.models.pydantic_models import (
    FunctionModel,
    GenerateTokenRequest,
    GroupMembers,
    GroupModel,
    GroupRole,
    Groups,
    PolicyModel,
    PolicySummaries,
    PolicySummary,
    RoleModel,
    TenantModel,
    Tenants,
    TokenSummaries,
    TokenSummary,
    UserDirectoryCapabilitiesModel,
    UserDirectoryModel,
    UserDirectorySummaries,
    UserDirectorySummary,
    UserRequest,
    Users,
)
from warden.models.security import (
    Function,
    Group,
    GroupMemberType,
    PasswordChangeReason,
    PasswordReset,
    PasswordResetStatus,
    Policy,
    PolicySortBy,
    Role,
    SortDirection,
    Tenant,
    Token,
    TokenSortBy,
    TokenStatus,
    TokenType,
    User,
    UserDirectory,
    UserSortBy,
)
from warden.repositories import (
    FunctionRepository,
    GroupRepository,
    PasswordResetRepository,
    PolicyRepository,
    RoleRepository,
    TenantRepository,
    TokenRepository,
    UserDirectoryRepository,
    UserRepository,
)
from warden.security.directories import (
    INTERNAL_USER_DIRECTORY_TYPE,
    UserDirectoryProvider,
    UserDirectoryType,
    create_provider,
    get_user_directory_type,
    get_user_directory_types,
)
from warden.security.notifications import (
    LoggingPasswordResetNotifier,
    PasswordResetNotifier,
)
from warden.security.passwords import generate_security_code, hash_security_code
from warden.security.policies import validate_policy_data
from warden.security.tokens import sign_token
from warden.utils import utc_now

logger = logging.getLogger(__name__)


def service_operation(message: str, commit: bool = False):
    """Commit after a successful mutation and translate database failures.

    A service built with ``autocommit=False`` leaves the commit to its caller,
    so several operations can form one unit of work.
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                result = await func(self, *args, **kwargs)
                if commit and self.autocommit:
                    await self.db.commit()
                return result
            except SecurityServiceError:
                raise
            except SQLAlchemyError as e:
                logger.error(f"{message}: {e}")
                await self.db.rollback()
                raise ServiceUnavailableError(message) from e

        return wrapper

    return decorator


def require(parameter: str, value) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgumentError(parameter)


def _page(page_index: int | None, page_size: int | None) -> tuple[int, int, int | None]:
    page_index = page_index or 0
    if page_size is None:
        return page_index, 0, None
    return page_index, page_index * page_size, page_size


class SecurityService:
    def __init__(
        self,
        db: AsyncSession,
        password_reset_notifier: PasswordResetNotifier | None = None,
        autocommit: bool = True,
    ):
        self.db = db
        self.autocommit = autocommit
        self.password_reset_notifier = (
            password_reset_notifier or LoggingPasswordResetNotifier()
        )
        self.users = UserRepository(db)
        self.groups = GroupRepository(db)
        self.roles = RoleRepository(db)
        self.functions = FunctionRepository(db)
        self.tenants = TenantRepository(db)
        self.user_directories = UserDirectoryRepository(db)
        self.tokens = TokenRepository(db)
        self.policies = PolicyRepository(db)
        self.password_resets = PasswordResetRepository(db)

    # ── helpers ────────────────────────────────────────────────────────

    async def _get_provider(self, user_directory_id: UUID) -> UserDirectoryProvider:
        require("userDirectoryId", user_directory_id)
        user_directory = await self.user_directories.get(user_directory_id)
        if user_directory is None:
            raise UserDirectoryNotFoundError(user_directory_id)
        return create_provider(user_directory, self.db)

    async def _require_tenant(self, tenant_id: UUID) -> Tenant:
        require("tenantId", tenant_id)
        tenant = await self.tenants.get(tenant_id)
        if tenant is None:
            raise TenantNotFoundError(tenant_id)
        return tenant

    async def _require_user_directory(self, user_directory_id: UUID) -> UserDirectory:
        require("userDirectoryId", user_directory_id)
        user_directory = await self.user_directories.get(user_directory_id)
        if user_directory is None:
            raise UserDirectoryNotFoundError(user_directory_id)
        return user_directory

    # ── tenants ────────────────────────────────────────────────────────

    @service_operation("Failed to create the tenant", commit=True)
    async def create_tenant(
        self, tenant: TenantModel, create_user_directory: bool = False
    ) -> tuple[Tenant, UserDirectory | None]:
        require("tenant", tenant)
        require("name", tenant.name)

        if tenant.tenant_id is not None and await self.tenants.exists_by_id(tenant.tenant_id):
            raise DuplicateTenantError(str(tenant.tenant_id))
        if await self.tenants.exists_by_name_ignore_case(tenant.name):
            raise DuplicateTenantError(tenant.name)

        entity = await self.tenants.add(
            Tenant(
                tenant_id=tenant.tenant_id or uuid.uuid4(),
                name=tenant.name,
                status=tenant.status,
            )
        )

        user_directory = None
        if create_user_directory:
            user_directory = await self.user_directories.add(
                UserDirectory(
                    user_directory_id=uuid.uuid4(),
                    type=INTERNAL_USER_DIRECTORY_TYPE,
                    name=f"{tenant.name} Internal User Directory",
                    parameters=default_internal_user_directory_parameters(),
                )
            )
            await self.tenants.add_user_directory_to_tenant(
                entity.tenant_id, user_directory.user_directory_id
            )

        logger.info(f"Created the tenant ({entity.name}) with ID ({entity.tenant_id})")
        return entity, user_directory

    @service_operation("Failed to update the tenant", commit=True)
    async def update_tenant(self, tenant: TenantModel) -> Tenant:
        require("tenant", tenant)
        require("name", tenant.name)
        entity = await self._require_tenant(tenant.tenant_id)
        entity.name = tenant.name
        entity.status = tenant.status
        return await self.tenants.save(entity)

    @service_operation("Failed to delete the tenant", commit=True)
    async def delete_tenant(self, tenant_id: UUID) -> None:
        require("tenantId", tenant_id)
        if not await self.tenants.delete_by_id(tenant_id):
            raise TenantNotFoundError(tenant_id)
        logger.info(f"Deleted the tenant ({tenant_id})")

    @service_operation("Failed to retrieve the tenant")
    async def get_tenant(self, tenant_id: UUID) -> Tenant:
        return await self._require_tenant(tenant_id)

    @service_operation("Failed to retrieve the name of the tenant")
    async def get_tenant_name(self, tenant_id: UUID) -> str:
        require("tenantId", tenant_id)
        name = await self.tenants.get_name_by_id(tenant_id)
        if name is None:
            raise TenantNotFoundError(tenant_id)
        return name

    @service_operation("Failed to retrieve the filtered tenants")
    async def get_tenants(
        self,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Tenants:
        page_index, offset, limit = _page(page_index, page_size)
        tenants = await self.tenants.find_filtered(filter, sort_direction, offset, limit)
        return Tenants(
            tenants=[TenantModel.model_validate(tenant) for tenant in tenants],
            total=await self.tenants.count_filtered(filter),
            filter=filter,
            sort_direction=sort_direction,
            page_index=page_index,
            page_size=page_size,
        )

    @service_operation("Failed to retrieve the tenants for the user directory")
    async def get_tenants_for_user_directory(self, user_directory_id: UUID) -> list[Tenant]:
        await self._require_user_directory(user_directory_id)
        return await self.tenants.find_by_user_directory_id(user_directory_id)

    @service_operation("Failed to retrieve the tenant IDs for the user directory")
    async def get_tenant_ids_for_user_directory(self, user_directory_id: UUID) -> list[UUID]:
        await self._require_user_directory(user_directory_id)
        return await self.tenants.get_tenant_ids_by_user_directory_id(user_directory_id)

    @service_operation("Failed to add the user directory to the tenant", commit=True)
    async def add_user_directory_to_tenant(self, tenant_id: UUID, user_directory_id: UUID) -> None:
        await self._require_tenant(tenant_id)
        await self._require_user_directory(user_directory_id)
        if await self.tenants.user_directory_to_tenant_mapping_exists(
            tenant_id, user_directory_id
        ):
            raise ExistingTenantUserDirectoryError(tenant_id, user_directory_id)
        await self.tenants.add_user_directory_to_tenant(tenant_id, user_directory_id)

    @service_operation("Failed to remove the user directory from the tenant", commit=True)
    async def remove_user_directory_from_tenant(
        self, tenant_id: UUID, user_directory_id: UUID
    ) -> None:
        await self._require_tenant(tenant_id)
        require("userDirectoryId", user_directory_id)
        if not await self.tenants.remove_user_directory_from_tenant(tenant_id, user_directory_id):
            raise TenantUserDirectoryNotFoundError(tenant_id, user_directory_id)

    @service_operation("Failed to retrieve the user directories for the tenant")
    async def get_user_directories_for_tenant(self, tenant_id: UUID) -> list[UserDirectory]:
        await self._require_tenant(tenant_id)
        return await self.user_directories.find_by_tenant_id(tenant_id)

    @service_operation("Failed to retrieve the user directory IDs for the tenant")
    async def get_user_directory_ids_for_tenant(self, tenant_id: UUID) -> list[UUID]:
        await self._require_tenant(tenant_id)
        return await self.tenants.get_user_directory_ids_by_tenant_id(tenant_id)

    @service_operation("Failed to retrieve the user directory summaries for the tenant")
    async def get_user_directory_summaries_for_tenant(
        self, tenant_id: UUID
    ) -> list[UserDirectorySummary]:
        await self._require_tenant(tenant_id)
        return [
            UserDirectorySummary.model_validate(user_directory)
            for user_directory in await self.user_directories.find_by_tenant_id(tenant_id)
        ]

    # ── user directories ───────────────────────────────────────────────

    @service_operation("Failed to create the user directory", commit=True)
    async def create_user_directory(self, user_directory: UserDirectoryModel) -> UserDirectory:
        require("userDirectory", user_directory)
        require("name", user_directory.name)
        get_user_directory_type(user_directory.type)

        if user_directory.user_directory_id is not None and await self.user_directories.exists_by_id(
            user_directory.user_directory_id
        ):
            raise DuplicateUserDirectoryError(str(user_directory.user_directory_id))
        if await self.user_directories.exists_by_name_ignore_case(user_directory.name):
            raise DuplicateUserDirectoryError(user_directory.name)

        entity = await self.user_directories.add(
            UserDirectory(
                user_directory_id=user_directory.user_directory_id or uuid.uuid4(),
                type=user_directory.type,
                name=user_directory.name,
                parameters=[p.model_dump() for p in user_directory.parameters],
            )
        )
        logger.info(
            f"Created the user directory ({entity.name}) with ID ({entity.user_directory_id})"
        )
        return entity

    @service_operation("Failed to update the user directory", commit=True)
    async def update_user_directory(self, user_directory: UserDirectoryModel) -> UserDirectory:
        require("userDirectory", user_directory)
        require("name", user_directory.name)
        get_user_directory_type(user_directory.type)
        entity = await self._require_user_directory(user_directory.user_directory_id)
        entity.type = user_directory.type
        entity.name = user_directory.name
        entity.parameters = [p.model_dump() for p in user_directory.parameters]
        return await self.user_directories.save(entity)

    @service_operation("Failed to delete the user directory", commit=True)
    async def delete_user_directory(self, user_directory_id: UUID) -> None:
        await self._require_user_directory(user_directory_id)
        if await self.groups.exists_by_user_directory_id(user_directory_id):
            raise ExistingGroupsError(user_directory_id)
        if await self.users.exists_by_user_directory_id(user_directory_id):
            raise ExistingUsersError(user_directory_id)
        await self.user_directories.delete_by_id(user_directory_id)
        logger.info(f"Deleted the user directory ({user_directory_id})")

    @service_operation("Failed to retrieve the user directory")
    async def get_user_directory(self, user_directory_id: UUID) -> UserDirectory:
        return await self._require_user_directory(user_directory_id)

    @service_operation("Failed to retrieve the name of the user directory")
    async def get_user_directory_name(self, user_directory_id: UUID) -> str:
        require("userDirectoryId", user_directory_id)
        name = await self.user_directories.get_name_by_id(user_directory_id)
        if name is None:
            raise UserDirectoryNotFoundError(user_directory_id)
        return name

    @service_operation("Failed to retrieve the user directories")
    async def get_user_directories(self) -> list[UserDirectory]:
        return await self.user_directories.find_all()

    @service_operation("Failed to retrieve the filtered user directory summaries")
    async def get_user_directory_summaries(
        self,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> UserDirectorySummaries:
        page_index, offset, limit = _page(page_index, page_size)
        user_directories = await self.user_directories.find_filtered(
            filter, sort_direction, offset, limit
        )
        return UserDirectorySummaries(
            user_directory_summaries=[
                UserDirectorySummary.model_validate(user_directory)
                for user_directory in user_directories
            ],
            total=await self.user_directories.count_filtered(filter),
            filter=filter,
            sort_direction=sort_direction,
            page_index=page_index,
            page_size=page_size,
        )

    @service_operation("Failed to retrieve the capabilities for the user directory")
    async def get_user_directory_capabilities(
        self, user_directory_id: UUID
    ) -> UserDirectoryCapabilitiesModel:
        provider = await self._get_provider(user_directory_id)
        return UserDirectoryCapabilitiesModel.model_validate(provider.capabilities)

    @service_operation("Failed to retrieve the user directory type for the user directory")
    async def get_user_directory_type_for_user_directory(
        self, user_directory_id: UUID
    ) -> UserDirectoryType:
        require("userDirectoryId", user_directory_id)
        type_code = await self.user_directories.get_type_for_user_directory_id(user_directory_id)
        if type_code is None:
            raise UserDirectoryNotFoundError(user_directory_id)
        return get_user_directory_type(type_code)

    async def get_user_directory_types(self) -> list[UserDirectoryType]:
        return get_user_directory_types()

    @service_operation("Failed to retrieve the user directory ID for the user")
    async def get_user_directory_id_for_user(self, username: str) -> UUID | None:
        require("username", username)
        return await self.users.get_user_directory_id_by_username_ignore_case(username)

    @service_operation("Failed to retrieve the user directory IDs for the user")
    async def get_user_directory_ids_for_user(self, username: str) -> list[UUID]:
        """Every directory of the tenants linked to the user's own directory."""
        require("username", username)
        user_directory_id = await self.users.get_user_directory_id_by_username_ignore_case(
            username
        )
        if user_directory_id is None:
            raise UserNotFoundError(username)

        user_directory_ids: list[UUID] = []
        for tenant_id in await self.tenants.get_tenant_ids_by_user_directory_id(
            user_directory_id
        ):
            for tenant_user_directory_id in await self.tenants.get_user_directory_ids_by_tenant_id(
                tenant_id
            ):
                if tenant_user_directory_id not in user_directory_ids:
                    user_directory_ids.append(tenant_user_directory_id)
        return user_directory_ids

    # ── users ──────────────────────────────────────────────────────────

    @service_operation("Failed to create the user", commit=True)
    async def create_user(
        self, user: UserRequest, expired_password: bool = False, user_locked: bool = False
    ) -> User:
        require("user", user)
        require("username", user.username)
        provider = await self._get_provider(user.user_directory_id)
        return await provider.create_user(user, expired_password, user_locked)

    @service_operation("Failed to update the user", commit=True)
    async def update_user(
        self, user: UserRequest, expire_password: bool = False, lock_user: bool = False
    ) -> User:
        require("user", user)
        require("username", user.username)
        provider = await self._get_provider(user.user_directory_id)
        return await provider.update_user(user, expire_password, lock_user)

    @service_operation("Failed to delete the user", commit=True)
    async def delete_user(self, user_directory_id: UUID, username: str) -> None:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        await provider.delete_user(username)

    @service_operation("Failed to retrieve the user")
    async def get_user(self, user_directory_id: UUID, username: str) -> User:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_user(username)

    @service_operation("Failed to retrieve the name of the user")
    async def get_user_name(self, user_directory_id: UUID, username: str) -> str:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_user_name(username)

    @service_operation("Failed to retrieve the filtered users")
    async def get_users(
        self,
        user_directory_id: UUID,
        filter: str | None = None,
        sort_by: UserSortBy | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Users:
        provider = await self._get_provider(user_directory_id)
        return await provider.get_users(filter, sort_by, sort_direction, page_index, page_size)

    @service_operation("Failed to find the users")
    async def find_users(self, user_directory_id: UUID, attributes: dict[str, str]) -> list[User]:
        require("attributes", attributes)
        provider = await self._get_provider(user_directory_id)
        return await provider.find_users(attributes)

    @service_operation("Failed to check whether the user exists")
    async def is_existing_user(self, user_directory_id: UUID, username: str) -> bool:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.is_existing_user(username)

    @service_operation("Failed to authenticate the user")
    async def authenticate(self, username: str, password: str) -> UUID:
        require("username", username)
        require("password", password)

        user_directory_id = await self.users.get_user_directory_id_by_username_ignore_case(
            username
        )
        if user_directory_id is None:
            raise UserNotFoundError(username)

        provider = await self._get_provider(user_directory_id)
        try:
            await provider.authenticate(username, password)
        except AuthenticationFailedError:
            # Keep the incremented password attempts.
            if self.autocommit:
                await self.db.commit()
            logger.warning(f"Failed to authenticate the user ({username})")
            raise
        return user_directory_id

    @service_operation("Failed to change the password for the user", commit=True)
    async def change_password(self, username: str, password: str, new_password: str) -> UUID:
        require("username", username)
        require("password", password)
        require("newPassword", new_password)

        user_directory_id = await self.users.get_user_directory_id_by_username_ignore_case(
            username
        )
        if user_directory_id is None:
            raise AuthenticationFailedError(username)

        provider = await self._get_provider(user_directory_id)
        await provider.change_password(username, password, new_password)
        return user_directory_id

    @service_operation("Failed to change the password for the user", commit=True)
    async def admin_change_password(
        self,
        user_directory_id: UUID,
        username: str,
        new_password: str,
        expire_password: bool = False,
        lock_user: bool = False,
        reset_password_history: bool = False,
        reason: PasswordChangeReason = PasswordChangeReason.ADMINISTRATIVE,
    ) -> None:
        require("username", username)
        require("newPassword", new_password)
        provider = await self._get_provider(user_directory_id)
        await provider.admin_change_password(
            username, new_password, expire_password, lock_user, reset_password_history, reason
        )

    # ── groups ─────────────────────────────────────────────────────────

    @service_operation("Failed to create the group", commit=True)
    async def create_group(self, group: GroupModel) -> Group:
        require("group", group)
        require("name", group.name)
        provider = await self._get_provider(group.user_directory_id)
        return await provider.create_group(group)

    @service_operation("Failed to update the group", commit=True)
    async def update_group(self, group: GroupModel) -> Group:
        require("group", group)
        require("name", group.name)
        provider = await self._get_provider(group.user_directory_id)
        return await provider.update_group(group)

    @service_operation("Failed to delete the group", commit=True)
    async def delete_group(self, user_directory_id: UUID, group_name: str) -> None:
        require("groupName", group_name)
        provider = await self._get_provider(user_directory_id)
        await provider.delete_group(group_name)

    @service_operation("Failed to retrieve the group")
    async def get_group(self, user_directory_id: UUID, group_name: str) -> Group:
        require("groupName", group_name)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_group(group_name)

    @service_operation("Failed to retrieve the group names")
    async def get_group_names(self, user_directory_id: UUID) -> list[str]:
        provider = await self._get_provider(user_directory_id)
        return await provider.get_group_names()

    @service_operation("Failed to retrieve the filtered groups")
    async def get_groups(
        self,
        user_directory_id: UUID,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> Groups:
        provider = await self._get_provider(user_directory_id)
        return await provider.get_groups(filter, sort_direction, page_index, page_size)

    @service_operation("Failed to retrieve the groups for the user")
    async def get_groups_for_user(self, user_directory_id: UUID, username: str) -> list[Group]:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_groups_for_user(username)

    @service_operation("Failed to retrieve the group names for the user")
    async def get_group_names_for_user(self, user_directory_id: UUID, username: str) -> list[str]:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_group_names_for_user(username)

    @service_operation("Failed to add the user to the group", commit=True)
    async def add_user_to_group(
        self, user_directory_id: UUID, group_name: str, username: str
    ) -> None:
        require("groupName", group_name)
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        await provider.add_user_to_group(group_name, username)

    @service_operation("Failed to remove the user from the group", commit=True)
    async def remove_user_from_group(
        self, user_directory_id: UUID, group_name: str, username: str
    ) -> None:
        require("groupName", group_name)
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        await provider.remove_user_from_group(group_name, username)

    @service_operation("Failed to add the group member to the group", commit=True)
    async def add_member_to_group(
        self,
        user_directory_id: UUID,
        group_name: str,
        member_type: GroupMemberType,
        member_name: str,
    ) -> None:
        require("groupName", group_name)
        require("memberType", member_type)
        require("memberName", member_name)
        provider = await self._get_provider(user_directory_id)
        await provider.add_member_to_group(group_name, member_type, member_name)

    @service_operation("Failed to remove the group member from the group", commit=True)
    async def remove_member_from_group(
        self,
        user_directory_id: UUID,
        group_name: str,
        member_type: GroupMemberType,
        member_name: str,
    ) -> None:
        require("groupName", group_name)
        require("memberType", member_type)
        require("memberName", member_name)
        provider = await self._get_provider(user_directory_id)
        await provider.remove_member_from_group(group_name, member_type, member_name)

    @service_operation("Failed to retrieve the group members for the group")
    async def get_members_for_group(
        self,
        user_directory_id: UUID,
        group_name: str,
        filter: str | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> GroupMembers:
        require("groupName", group_name)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_members_for_group(
            group_name, filter, sort_direction, page_index, page_size
        )

    @service_operation("Failed to check whether the user is a member of the group")
    async def is_user_in_group(
        self, user_directory_id: UUID, group_name: str, username: str
    ) -> bool:
        require("groupName", group_name)
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.is_user_in_group(group_name, username)

    @service_operation("Failed to add the role to the group", commit=True)
    async def add_role_to_group(
        self, user_directory_id: UUID, group_name: str, role_code: str
    ) -> None:
        require("groupName", group_name)
        require("roleCode", role_code)
        provider = await self._get_provider(user_directory_id)
        await provider.add_role_to_group(group_name, role_code)

    @service_operation("Failed to remove the role from the group", commit=True)
    async def remove_role_from_group(
        self, user_directory_id: UUID, group_name: str, role_code: str
    ) -> None:
        require("groupName", group_name)
        require("roleCode", role_code)
        provider = await self._get_provider(user_directory_id)
        await provider.remove_role_from_group(group_name, role_code)

    @service_operation("Failed to retrieve the roles for the group")
    async def get_roles_for_group(
        self, user_directory_id: UUID, group_name: str
    ) -> list[GroupRole]:
        require("groupName", group_name)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_roles_for_group(group_name)

    @service_operation("Failed to retrieve the role codes for the group")
    async def get_role_codes_for_group(
        self, user_directory_id: UUID, group_name: str
    ) -> list[str]:
        require("groupName", group_name)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_role_codes_for_group(group_name)

    # ── roles and functions ────────────────────────────────────────────

    @service_operation("Failed to create the function", commit=True)
    async def create_function(self, function: FunctionModel) -> Function:
        require("function", function)
        require("code", function.code)
        if await self.functions.exists_by_id(function.code):
            raise DuplicateFunctionError(function.code)
        return await self.functions.add(
            Function(code=function.code, name=function.name, description=function.description)
        )

    @service_operation("Failed to update the function", commit=True)
    async def update_function(self, function: FunctionModel) -> Function:
        require("function", function)
        require("code", function.code)
        entity = await self.functions.get(function.code)
        if entity is None:
            raise FunctionNotFoundError(function.code)
        entity.name = function.name
        entity.description = function.description
        return await self.functions.save(entity)

    @service_operation("Failed to delete the function", commit=True)
    async def delete_function(self, function_code: str) -> None:
        require("functionCode", function_code)
        if not await self.functions.delete_by_code(function_code):
            raise FunctionNotFoundError(function_code)

    @service_operation("Failed to retrieve the function")
    async def get_function(self, function_code: str) -> Function:
        require("functionCode", function_code)
        function = await self.functions.get(function_code)
        if function is None:
            raise FunctionNotFoundError(function_code)
        return function

    @service_operation("Failed to retrieve the functions")
    async def get_functions(self) -> list[Function]:
        return await self.functions.find_all()

    @service_operation("Failed to create the role", commit=True)
    async def create_role(self, role: RoleModel) -> Role:
        require("role", role)
        require("code", role.code)
        if await self.roles.exists_by_id(role.code):
            raise DuplicateRoleError(role.code)
        return await self.roles.add(
            Role(code=role.code, name=role.name, description=role.description)
        )

    @service_operation("Failed to update the role", commit=True)
    async def update_role(self, role: RoleModel) -> Role:
        require("role", role)
        require("code", role.code)
        entity = await self.roles.get(role.code)
        if entity is None:
            raise RoleNotFoundError(role.code)
        entity.name = role.name
        entity.description = role.description
        return await self.roles.save(entity)

    @service_operation("Failed to delete the role", commit=True)
    async def delete_role(self, role_code: str) -> None:
        require("roleCode", role_code)
        if not await self.roles.delete_by_code(role_code):
            raise RoleNotFoundError(role_code)

    @service_operation("Failed to retrieve the role")
    async def get_role(self, role_code: str) -> Role:
        require("roleCode", role_code)
        role = await self.roles.get(role_code)
        if role is None:
            raise RoleNotFoundError(role_code)
        return role

    @service_operation("Failed to retrieve the roles")
    async def get_roles(self) -> list[Role]:
        return await self.roles.find_all()

    @service_operation("Failed to add the function to the role", commit=True)
    async def add_function_to_role(self, role_code: str, function_code: str) -> None:
        require("roleCode", role_code)
        require("functionCode", function_code)
        if not await self.roles.exists_by_id(role_code):
            raise RoleNotFoundError(role_code)
        if not await self.functions.exists_by_id(function_code):
            raise FunctionNotFoundError(function_code)
        if await self.roles.function_to_role_mapping_exists(role_code, function_code):
            return
        await self.roles.add_function_to_role(role_code, function_code)

    @service_operation("Failed to remove the function from the role", commit=True)
    async def remove_function_from_role(self, role_code: str, function_code: str) -> None:
        require("roleCode", role_code)
        require("functionCode", function_code)
        if not await self.roles.exists_by_id(role_code):
            raise RoleNotFoundError(role_code)
        if not await self.roles.remove_function_from_role(role_code, function_code):
            raise FunctionNotFoundError(function_code)

    @service_operation("Failed to retrieve the function codes for the role")
    async def get_function_codes_for_role(self, role_code: str) -> list[str]:
        require("roleCode", role_code)
        if not await self.roles.exists_by_id(role_code):
            raise RoleNotFoundError(role_code)
        return await self.roles.get_function_codes_by_role_code(role_code)

    @service_operation("Failed to retrieve the function codes for the user")
    async def get_function_codes_for_user(self, user_directory_id: UUID, username: str) -> list[str]:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_function_codes_for_user(username)

    @service_operation("Failed to retrieve the role codes for the user")
    async def get_role_codes_for_user(self, user_directory_id: UUID, username: str) -> list[str]:
        require("username", username)
        provider = await self._get_provider(user_directory_id)
        return await provider.get_role_codes_for_user(username)

    # ── password reset ─────────────────────────────────────────────────

    @service_operation("Failed to initiate the password reset for the user", commit=True)
    async def initiate_password_reset(
        self,
        username: str,
        reset_password_url: str,
        send_email: bool = True,
        security_code: str | None = None,
    ) -> None:
        require("username", username)
        require("resetPasswordUrl", reset_password_url)

        user_directory_id = await self.users.get_user_directory_id_by_username_ignore_case(
            username
        )
        if user_directory_id is None:
            raise UserNotFoundError(username)

        provider = await self._get_provider(user_directory_id)
        user = await provider.get_user(username)

        security_code = security_code or generate_security_code(
            settings.password_reset_code_length
        )
        await self.password_resets.add(
            PasswordReset(
                username=user.username,
                security_code_hash=hash_security_code(security_code),
                status=PasswordResetStatus.REQUESTED,
                requested=utc_now(),
            )
        )

        if send_email:
            await self.password_reset_notifier.send_password_reset(
                user, security_code, reset_password_url
            )

    @service_operation("Failed to reset the password for the user", commit=True)
    async def reset_password(self, username: str, new_password: str, security_code: str) -> None:
        require("username", username)
        require("newPassword", new_password)
        require("securityCode", security_code)

        user_directory_id = await self.users.get_user_directory_id_by_username_ignore_case(
            username
        )
        if user_directory_id is None:
            raise InvalidSecurityCodeError(username)

        security_code_hash = hash_security_code(security_code)
        for password_reset in await self.password_resets.find_all_by_username_and_status(
            username, PasswordResetStatus.REQUESTED
        ):
            if password_reset.security_code_hash != security_code_hash:
                continue

            provider = await self._get_provider(user_directory_id)
            await provider.reset_password(username, new_password)
            await self.password_resets.expire_password_resets(
                password_reset.username, security_code_hash
            )
            await self.password_resets.complete(password_reset.username, security_code_hash)
            logger.info(f"Reset the password for the user ({username})")
            return

        raise InvalidSecurityCodeError(username)

    # ── tokens ─────────────────────────────────────────────────────────

    @service_operation("Failed to generate the token", commit=True)
    async def generate_token(self, request: GenerateTokenRequest) -> Token:
        require("generateTokenRequest", request)
        require("name", request.name)
        if request.type != TokenType.JWT:
            raise InvalidArgumentError("type")

        token_id = uuid.uuid4().hex
        issued = utc_now()
        data = sign_token(token_id, request, issued)

        token = await self.tokens.add(
            Token(
                token_id=token_id,
                type=request.type,
                name=request.name,
                description=request.description,
                issued=issued,
                valid_from_date=request.valid_from_date,
                expiry_date=request.expiry_date,
                claims=[claim.model_dump() for claim in request.claims],
                data=data,
            )
        )
        logger.info(f"Generated the token ({request.name}) with ID ({token_id})")
        return token

    @service_operation("Failed to retrieve the token")
    async def get_token(self, token_id: str) -> Token:
        require("tokenId", token_id)
        token = await self.tokens.get(token_id)
        if token is None:
            raise TokenNotFoundError(token_id)
        return token

    @service_operation("Failed to retrieve the name of the token")
    async def get_token_name(self, token_id: str) -> str:
        require("tokenId", token_id)
        name = await self.tokens.get_name_by_id(token_id)
        if name is None:
            raise TokenNotFoundError(token_id)
        return name

    @service_operation("Failed to retrieve the tokens")
    async def get_tokens(self) -> list[Token]:
        return await self.tokens.find_all()

    @service_operation("Failed to retrieve the revoked tokens")
    async def get_revoked_tokens(self) -> list[Token]:
        return await self.tokens.get_revoked_tokens()

    @service_operation("Failed to retrieve the filtered token summaries")
    async def get_token_summaries(
        self,
        status: TokenStatus | None = None,
        filter: str | None = None,
        sort_by: TokenSortBy | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> TokenSummaries:
        page_index, offset, limit = _page(page_index, page_size)
        tokens = await self.tokens.find_filtered(
            status, filter, sort_by, sort_direction, offset, limit
        )
        return TokenSummaries(
            token_summaries=[TokenSummary.model_validate(token) for token in tokens],
            total=await self.tokens.count_filtered(status, filter),
            status=status,
            filter=filter,
            sort_by=sort_by,
            sort_direction=sort_direction,
            page_index=page_index,
            page_size=page_size,
        )

    @service_operation("Failed to revoke the token", commit=True)
    async def revoke_token(self, token_id: str) -> None:
        require("tokenId", token_id)
        if not await self.tokens.revoke_token(token_id, date.today()):
            raise TokenNotFoundError(token_id)
        logger.info(f"Revoked the token ({token_id})")

    @service_operation("Failed to reinstate the token", commit=True)
    async def reinstate_token(self, token_id: str) -> None:
        require("tokenId", token_id)
        if not await self.tokens.reinstate_token(token_id):
            raise TokenNotFoundError(token_id)
        logger.info(f"Reinstated the token ({token_id})")

    @service_operation("Failed to delete the token", commit=True)
    async def delete_token(self, token_id: str) -> None:
        require("tokenId", token_id)
        if not await self.tokens.delete_by_id(token_id):
            raise TokenNotFoundError(token_id)

    # ── policies ───────────────────────────────────────────────────────

    @service_operation("Failed to create the policy", commit=True)
    async def create_policy(self, policy: PolicyModel) -> Policy:
        require("policy", policy)
        require("policyId", policy.policy_id)
        validate_policy_data(policy.policy_id, policy.version, policy.type, policy.data)
        if await self.policies.exists_by_id(policy.policy_id):
            raise DuplicatePolicyError(policy.policy_id)
        return await self.policies.add(
            Policy(
                policy_id=policy.policy_id,
                version=policy.version,
                name=policy.name,
                type=policy.type,
                data=policy.data,
            )
        )

    @service_operation("Failed to update the policy", commit=True)
    async def update_policy(self, policy: PolicyModel) -> Policy:
        require("policy", policy)
        require("policyId", policy.policy_id)
        validate_policy_data(policy.policy_id, policy.version, policy.type, policy.data)
        entity = await self.policies.get(policy.policy_id)
        if entity is None:
            raise PolicyNotFoundError(policy.policy_id)
        entity.version = policy.version
        entity.name = policy.name
        entity.type = policy.type
        entity.data = policy.data
        return await self.policies.save(entity)

    @service_operation("Failed to delete the policy", commit=True)
    async def delete_policy(self, policy_id: str) -> None:
        require("policyId", policy_id)
        if not await self.policies.delete_by_id(policy_id):
            raise PolicyNotFoundError(policy_id)

    @service_operation("Failed to retrieve the policy")
    async def get_policy(self, policy_id: str) -> Policy:
        require("policyId", policy_id)
        policy = await self.policies.get(policy_id)
        if policy is None:
            raise PolicyNotFoundError(policy_id)
        return policy

    @service_operation("Failed to retrieve the name of the policy")
    async def get_policy_name(self, policy_id: str) -> str:
        require("policyId", policy_id)
        name = await self.policies.get_name_by_id(policy_id)
        if name is None:
            raise PolicyNotFoundError(policy_id)
        return name

    @service_operation("Failed to retrieve the policies")
    async def get_policies(self) -> list[Policy]:
        return await self.policies.find_all()

    @service_operation("Failed to retrieve the filtered policy summaries")
    async def get_policy_summaries(
        self,
        filter: str | None = None,
        sort_by: PolicySortBy | None = None,
        sort_direction: SortDirection | None = None,
        page_index: int | None = None,
        page_size: int | None = None,
    ) -> PolicySummaries:
        page_index, offset, limit = _page(page_index, page_size)
        policies = await self.policies.find_filtered(
            filter, sort_by, sort_direction, offset, limit
        )
        return PolicySummaries(
            policy_summaries=[PolicySummary.model_validate(policy) for policy in policies],
            total=await self.policies.count_filtered(filter),
            filter=filter,
            sort_by=sort_by,
            sort_direction=sort_direction,
            page_index=page_index,
            page_size=page_size,
        )
