from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from warden.api.v1.deps import ensure_user_directory_access, get_security_service
from warden.exceptions import InvalidArgumentError
from warden.models.pydantic_models import (
    TenantModel,
    UserDirectoryCapabilitiesModel,
    UserDirectoryModel,
    UserDirectorySummaries,
    UserDirectoryTypeModel,
)
from warden.models.security import SortDirection
from warden.security.authentication import get_current_user, require_function
from warden.security.functions import USER_DIRECTORY_ADMINISTRATION
from warden.security.user_details import UserDetails
from warden.services.security_service import SecurityService

router = APIRouter(tags=["User Directories"])

administration = require_function(USER_DIRECTORY_ADMINISTRATION)


@router.get("/user-directory-types", response_model=list[UserDirectoryTypeModel])
async def get_user_directory_types(
    _: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    return [
        UserDirectoryTypeModel(code=t.code, name=t.name)
        for t in await service.get_user_directory_types()
    ]


@router.get("/user-directories", response_model=UserDirectorySummaries)
async def get_user_directory_summaries(
    filter: str | None = None,
    sort_direction: SortDirection = SortDirection.ASCENDING,
    page_index: int = Query(0, ge=0),
    page_size: int = Query(10, ge=1),
    _: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    return await service.get_user_directory_summaries(
        filter, sort_direction, page_index, page_size
    )


@router.post("/user-directories", status_code=status.HTTP_204_NO_CONTENT)
async def create_user_directory(
    user_directory: UserDirectoryModel,
    _: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    await service.create_user_directory(user_directory)


@router.get("/user-directories/{user_directory_id}", response_model=UserDirectoryModel)
async def get_user_directory(
    user_directory_id: UUID,
    _: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    return await service.get_user_directory(user_directory_id)


@router.put("/user-directories/{user_directory_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_user_directory(
    user_directory_id: UUID,
    user_directory: UserDirectoryModel,
    _: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    if (
        user_directory.user_directory_id is not None
        and user_directory.user_directory_id != user_directory_id
    ):
        raise InvalidArgumentError("userDirectory")
    await service.update_user_directory(
        user_directory.model_copy(update={"user_directory_id": user_directory_id})
    )


@router.delete(
    "/user-directories/{user_directory_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_user_directory(
    user_directory_id: UUID,
    _: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    await service.delete_user_directory(user_directory_id)


@router.get("/user-directories/{user_directory_id}/name", response_model=str)
async def get_user_directory_name(
    user_directory_id: UUID,
    current_user: UserDetails = Depends(get_current_user),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_user_directory_name(user_directory_id)


@router.get(
    "/user-directories/{user_directory_id}/capabilities",
    response_model=UserDirectoryCapabilitiesModel,
)
async def get_user_directory_capabilities(
    user_directory_id: UUID,
    current_user: UserDetails = Depends(get_current_user),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_user_directory_capabilities(user_directory_id)


@router.get(
    "/user-directories/{user_directory_id}/tenants", response_model=list[TenantModel]
)
async def get_tenants_for_user_directory(
    user_directory_id: UUID,
    _: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    return await service.get_tenants_for_user_directory(user_directory_id)
