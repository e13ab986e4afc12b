"""
Users of a user directory, and password changes and resets.

Password reset endpoints are public: the caller proves possession of the
security code that was delivered out of band.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from warden.api.v1.deps import ensure_user_directory_access, get_security_service
from warden.exceptions import AccessDeniedError, InvalidArgumentError, UnauthorizedError
from warden.models.pydantic_models import (
    PasswordChange,
    PasswordResetCompletion,
    PasswordResetInitiation,
    UserModel,
    UserRequest,
    Users,
)
from warden.models.security import SortDirection, UserSortBy
from warden.security.authentication import (
    ADMINISTRATOR_AUTHORITY,
    get_current_user,
    get_optional_current_user,
    require_function,
)
from warden.security.functions import RESET_USER_PASSWORD, USER_ADMINISTRATION
from warden.security.user_details import UserDetails
from warden.services.security_service import SecurityService

router = APIRouter(tags=["Users"])

administration = require_function(USER_ADMINISTRATION)


@router.get("/user-directories/{user_directory_id}/users", response_model=Users)
async def get_users(
    user_directory_id: UUID,
    filter: str | None = None,
    sort_by: UserSortBy = UserSortBy.NAME,
    sort_direction: SortDirection = SortDirection.ASCENDING,
    page_index: int = Query(0, ge=0),
    page_size: int = Query(10, ge=1),
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_users(
        user_directory_id, filter, sort_by, sort_direction, page_index, page_size
    )


@router.post(
    "/user-directories/{user_directory_id}/users", status_code=status.HTTP_204_NO_CONTENT
)
async def create_user(
    user_directory_id: UUID,
    user: UserRequest,
    expired_password: bool = False,
    user_locked: bool = False,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.create_user(
        user.model_copy(update={"user_directory_id": user_directory_id}),
        expired_password,
        user_locked,
    )


@router.get(
    "/user-directories/{user_directory_id}/users/{username}", response_model=UserModel
)
async def get_user(
    user_directory_id: UUID,
    username: str,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_user(user_directory_id, username)


@router.get("/user-directories/{user_directory_id}/users/{username}/name", response_model=str)
async def get_user_name(
    user_directory_id: UUID,
    username: str,
    current_user: UserDetails = Depends(get_current_user),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_user_name(user_directory_id, username)


@router.put(
    "/user-directories/{user_directory_id}/users/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def update_user(
    user_directory_id: UUID,
    username: str,
    user: UserRequest,
    expire_password: bool = False,
    lock_user: bool = False,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    if user.username.lower() != username.lower():
        raise InvalidArgumentError("user")
    await service.update_user(
        user.model_copy(update={"user_directory_id": user_directory_id}),
        expire_password,
        lock_user,
    )


@router.delete(
    "/user-directories/{user_directory_id}/users/{username}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_user(
    user_directory_id: UUID,
    username: str,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.delete_user(user_directory_id, username)


@router.get(
    "/user-directories/{user_directory_id}/users/{username}/group-names",
    response_model=list[str],
)
async def get_group_names_for_user(
    user_directory_id: UUID,
    username: str,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_group_names_for_user(user_directory_id, username)


# ── passwords ─────────────────────────────────────────────────────────────


@router.put("/users/{username}/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_password(
    username: str,
    request: PasswordChange,
    current_user: UserDetails | None = Depends(get_optional_current_user),
    service: SecurityService = Depends(get_security_service),
):
    """Change your own password, or as an administrator reset someone else's.

    A self-service change is authorized by the current password alone and
    needs no token, which is how a user with an expired password replaces it.
    The administrative path needs a bearer token.
    """
    if request.user_directory_id is None:
        if current_user is not None and current_user.username.lower() != username.lower():
            raise AccessDeniedError(
                f"The user ({current_user.username}) cannot change the password "
                f"for the user ({username})"
            )
        if not request.password:
            raise InvalidArgumentError("password")
        await service.change_password(username, request.password, request.new_password)
        return

    if current_user is None:
        raise UnauthorizedError("No authentication method found")
    if not (
        current_user.has_authority(ADMINISTRATOR_AUTHORITY)
        or current_user.has_authority(f"FUNCTION_{RESET_USER_PASSWORD}")
    ):
        raise AccessDeniedError(
            f"The user ({current_user.username}) cannot reset the password "
            f"for the user ({username})"
        )
    ensure_user_directory_access(current_user, request.user_directory_id)
    await service.admin_change_password(
        request.user_directory_id,
        username,
        request.new_password,
        request.expire_password,
        request.lock_user,
        request.reset_password_history,
        request.reason,
    )


@router.post("/users/{username}/reset-password", status_code=status.HTTP_204_NO_CONTENT)
async def initiate_password_reset(
    username: str,
    request: PasswordResetInitiation,
    service: SecurityService = Depends(get_security_service),
):
    await service.initiate_password_reset(
        username, request.reset_password_url, request.send_email
    )


@router.put("/users/{username}/reset-password", status_code=status.HTTP_204_NO_CONTENT)
async def reset_password(
    username: str,
    request: PasswordResetCompletion,
    service: SecurityService = Depends(get_security_service),
):
    await service.reset_password(username, request.new_password, request.security_code)
