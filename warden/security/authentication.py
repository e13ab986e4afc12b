"""
Authentication manager and FastAPI security dependencies.

Interactive sessions use short-lived HS256 access tokens issued by
``POST /api/v1/security/login``. Every request reloads the user details, so
revoked roles and disabled users take effect immediately.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from warden.config import settings
from warden.db.session import get_db
from warden.exceptions import (
    AccessDeniedError,
    AuthenticationFailedError,
    UnauthorizedError,
    UsernameNotFoundError,
)
from warden.services.security_service import SecurityService
from .user_details import UserDetails, UserDetailsService

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ADMINISTRATOR_ROLE_CODE = "Administrator"
ADMINISTRATOR_AUTHORITY = f"ROLE_{ADMINISTRATOR_ROLE_CODE}"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass
class UsernamePasswordAuthentication:
    username: str
    password: str


@dataclass
class Authentication:
    principal: UserDetails
    authorities: list[str] = field(default_factory=list)
    authenticated: bool = True

    @property
    def name(self) -> str:
        return self.principal.username


class AuthenticationManager:
    def __init__(self, db: AsyncSession):
        self.security_service = SecurityService(db)
        self.user_details_service = UserDetailsService(db, self.security_service)

    async def authenticate(self, authentication: UsernamePasswordAuthentication) -> Authentication:
        await self.security_service.authenticate(
            authentication.username, authentication.password
        )

        user_details = await self.user_details_service.load_user_by_username(
            authentication.username
        )
        if not user_details.is_enabled:
            logger.warning(f"Rejected the disabled user ({authentication.username})")
            raise AuthenticationFailedError(authentication.username)

        return Authentication(principal=user_details, authorities=list(user_details.authorities))


def create_access_token(user_details: UserDetails, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {
        "sub": user_details.username,
        "authorities": user_details.authorities,
        "user_directory_id": str(user_details.user_directory_id),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> UserDetails:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No authentication method found")

    try:
        payload = jwt.decode(credentials.credentials, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        raise UnauthorizedError("Invalid JWT")

    username = payload.get("sub")
    if not username:
        raise UnauthorizedError("No username found in token")

    try:
        user_details = await UserDetailsService(db).load_user_by_username(username)
    except UsernameNotFoundError:
        raise UnauthorizedError("Invalid or inactive user")

    if not user_details.is_enabled:
        raise UnauthorizedError("Invalid or inactive user")
    return user_details


async def get_optional_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> UserDetails | None:
    """Like ``get_current_user``, but ``None`` when no bearer token is sent."""
    if credentials is None or not credentials.credentials:
        return None
    return await get_current_user(credentials, db)


def require_function(function_code: str) -> Callable:
    """Dependency allowing administrators and holders of ``FUNCTION_<function_code>``."""

    async def _require_function(
        user: UserDetails = Depends(get_current_user),
    ) -> UserDetails:
        if user.has_authority(ADMINISTRATOR_AUTHORITY) or user.has_authority(
            f"FUNCTION_{function_code}"
        ):
            return user
        raise AccessDeniedError(
            f"The user ({user.username}) does not have the function ({function_code})"
        )

    return _require_function


def require_administrator() -> Callable:
    async def _require_administrator(
        user: UserDetails = Depends(get_current_user),
    ) -> UserDetails:
        if user.has_authority(ADMINISTRATOR_AUTHORITY):
            return user
        raise AccessDeniedError(f"The user ({user.username}) is not an administrator")

    return _require_administrator
