from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from warden.db.session import get_db
from warden.exceptions import AccessDeniedError
from warden.security.authentication import ADMINISTRATOR_AUTHORITY, AuthenticationManager
from warden.security.user_details import UserDetails
from warden.services.security_service import SecurityService


# Database dependency - use get_db directly with FastAPI's Depends()
# DO NOT create helper functions that call next(get_db()) as this breaks
# the generator pattern and causes connection leaks


def get_security_service(
    request: Request, db: AsyncSession = Depends(get_db)
) -> SecurityService:
    notifier = getattr(request.app.state, "password_reset_notifier", None)
    return SecurityService(db, password_reset_notifier=notifier)


def get_authentication_manager(db: AsyncSession = Depends(get_db)) -> AuthenticationManager:
    return AuthenticationManager(db)


def ensure_user_directory_access(user: UserDetails, user_directory_id: UUID) -> None:
    """Administrators see every directory, everyone else only their tenants' directories."""
    if user.has_authority(ADMINISTRATOR_AUTHORITY):
        return
    if user_directory_id not in user.user_directory_ids:
        raise AccessDeniedError(
            f"The user ({user.username}) does not have access to the user directory "
            f"({user_directory_id})"
        )
