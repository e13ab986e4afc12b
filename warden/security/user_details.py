"""
User details for authenticated principals.

``UserDetailsService.load_user_by_username`` flattens everything an
authorization check needs into a single ``UserDetails``: the granted
authorities (``FUNCTION_<code>`` then ``ROLE_<code>``), the user's own
directory, its tenants and every directory those tenants can see.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from warden.config import settings
from warden.exceptions import UsernameNotFoundError
from warden.models.security import UserStatus
from warden.services.security_service import SecurityService
from warden.utils import as_utc, safe_int, utc_now

FUNCTION_AUTHORITY_PREFIX = "FUNCTION_"
ROLE_AUTHORITY_PREFIX = "ROLE_"


@dataclass
class UserDetails:
    username: str
    password: str
    user_directory_id: UUID
    status: UserStatus
    authorities: list[str] = field(default_factory=list)
    tenant_ids: list[UUID] = field(default_factory=list)
    user_directory_ids: list[UUID] = field(default_factory=list)
    name: str = ""
    password_attempts: int = 0
    max_password_attempts: int = 0
    password_expiry: datetime | None = None

    @property
    def is_enabled(self) -> bool:
        return self.status == UserStatus.ACTIVE

    @property
    def is_account_non_locked(self) -> bool:
        if self.max_password_attempts <= 0:
            return True
        return (self.password_attempts or 0) < self.max_password_attempts

    @property
    def is_credentials_non_expired(self) -> bool:
        if self.password_expiry is None:
            return True
        return as_utc(self.password_expiry) > utc_now()

    @property
    def is_account_non_expired(self) -> bool:
        return True

    @property
    def function_codes(self) -> list[str]:
        return [
            authority[len(FUNCTION_AUTHORITY_PREFIX):]
            for authority in self.authorities
            if authority.startswith(FUNCTION_AUTHORITY_PREFIX)
        ]

    @property
    def role_codes(self) -> list[str]:
        return [
            authority[len(ROLE_AUTHORITY_PREFIX):]
            for authority in self.authorities
            if authority.startswith(ROLE_AUTHORITY_PREFIX)
        ]

    def has_authority(self, authority: str) -> bool:
        return authority in self.authorities


class UserDetailsService:
    def __init__(self, db: AsyncSession, security_service: SecurityService | None = None):
        self.security_service = security_service or SecurityService(db)

    async def load_user_by_username(self, username: str) -> UserDetails:
        service = self.security_service

        user_directory_id = await service.get_user_directory_id_for_user(username)
        if user_directory_id is None:
            raise UsernameNotFoundError(username)

        user = await service.get_user(user_directory_id, username)
        function_codes = await service.get_function_codes_for_user(user_directory_id, username)

        tenant_ids = await service.get_tenant_ids_for_user_directory(user_directory_id)
        user_directory_ids: list[UUID] = []
        for tenant_id in tenant_ids:
            for tenant_user_directory_id in await service.get_user_directory_ids_for_tenant(
                tenant_id
            ):
                if tenant_user_directory_id not in user_directory_ids:
                    user_directory_ids.append(tenant_user_directory_id)

        role_codes = await service.get_role_codes_for_user(user_directory_id, username)

        authorities = [FUNCTION_AUTHORITY_PREFIX + code for code in function_codes]
        authorities += [ROLE_AUTHORITY_PREFIX + code for code in role_codes]

        user_directory = await service.get_user_directory(user_directory_id)
        max_password_attempts = safe_int(
            user_directory.get_parameter("MaxPasswordAttempts"),
            settings.default_max_password_attempts,
        )

        return UserDetails(
            username=user.username,
            password=user.password,
            user_directory_id=user_directory_id,
            status=user.status,
            authorities=authorities,
            tenant_ids=list(tenant_ids),
            user_directory_ids=user_directory_ids,
            name=user.name,
            password_attempts=user.password_attempts,
            max_password_attempts=max_password_attempts,
            password_expiry=user.password_expiry,
        )
