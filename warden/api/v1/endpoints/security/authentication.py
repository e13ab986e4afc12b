"""
Login and the current principal.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from warden.api.v1.deps import get_authentication_manager
from warden.exceptions import AuthenticationFailedError, UserNotFoundError
from warden.security.authentication import (
    AuthenticationManager,
    UsernamePasswordAuthentication,
    create_access_token,
    get_current_user,
)
from warden.security.user_details import UserDetails

router = APIRouter(tags=["Authentication"])


# ── request / response schemas ────────────────────────────────────────────


class LoginRequest(BaseModel):
    username: str
    password: str


class Principal(BaseModel):
    username: str
    name: str
    user_directory_id: UUID
    authorities: list[str]
    tenant_ids: list[UUID]
    user_directory_ids: list[UUID]


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    principal: Principal


def _principal(user: UserDetails) -> Principal:
    return Principal(
        username=user.username,
        name=user.name,
        user_directory_id=user.user_directory_id,
        authorities=user.authorities,
        tenant_ids=user.tenant_ids,
        user_directory_ids=user.user_directory_ids,
    )


# ── endpoints ─────────────────────────────────────────────────────────────


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    authentication_manager: AuthenticationManager = Depends(get_authentication_manager),
):
    """Authenticate with username + password and receive a JWT."""
    try:
        authentication = await authentication_manager.authenticate(
            UsernamePasswordAuthentication(request.username, request.password)
        )
    except UserNotFoundError:
        raise AuthenticationFailedError(request.username)

    return LoginResponse(
        access_token=create_access_token(authentication.principal),
        token_type="bearer",
        principal=_principal(authentication.principal),
    )


@router.get("/me", response_model=Principal)
async def me(current_user: UserDetails = Depends(get_current_user)):
    return _principal(current_user)
