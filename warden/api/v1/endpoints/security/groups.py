from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from warden.api.v1.deps import ensure_user_directory_access, get_security_service
from warden.exceptions import InvalidArgumentError
from warden.models.pydantic_models import (
    GroupMemberRequest,
    GroupMembers,
    GroupModel,
    GroupRole,
    GroupRoleRequest,
    Groups,
)
from warden.models.security import GroupMemberType, SortDirection
from warden.security.authentication import require_function
from warden.security.functions import GROUP_ADMINISTRATION, USER_GROUPS
from warden.security.user_details import UserDetails
from warden.services.security_service import SecurityService

router = APIRouter(prefix="/user-directories/{user_directory_id}", tags=["Groups"])

administration = require_function(GROUP_ADMINISTRATION)
membership = require_function(USER_GROUPS)


@router.get("/groups", response_model=Groups)
async def get_groups(
    user_directory_id: UUID,
    filter: str | None = None,
    sort_direction: SortDirection = SortDirection.ASCENDING,
    page_index: int = Query(0, ge=0),
    page_size: int = Query(10, ge=1),
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_groups(
        user_directory_id, filter, sort_direction, page_index, page_size
    )


@router.get("/group-names", response_model=list[str])
async def get_group_names(
    user_directory_id: UUID,
    current_user: UserDetails = Depends(membership),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_group_names(user_directory_id)


@router.post("/groups", status_code=status.HTTP_204_NO_CONTENT)
async def create_group(
    user_directory_id: UUID,
    group: GroupModel,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.create_group(group.model_copy(update={"user_directory_id": user_directory_id}))


@router.get("/groups/{group_name}", response_model=GroupModel)
async def get_group(
    user_directory_id: UUID,
    group_name: str,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_group(user_directory_id, group_name)


@router.put("/groups/{group_name}", status_code=status.HTTP_204_NO_CONTENT)
async def update_group(
    user_directory_id: UUID,
    group_name: str,
    group: GroupModel,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    if group.name.lower() != group_name.lower():
        raise InvalidArgumentError("group")
    await service.update_group(group.model_copy(update={"user_directory_id": user_directory_id}))


@router.delete("/groups/{group_name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    user_directory_id: UUID,
    group_name: str,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.delete_group(user_directory_id, group_name)


# ── members ───────────────────────────────────────────────────────────────


@router.get("/groups/{group_name}/members", response_model=GroupMembers)
async def get_members_for_group(
    user_directory_id: UUID,
    group_name: str,
    filter: str | None = None,
    sort_direction: SortDirection = SortDirection.ASCENDING,
    page_index: int = Query(0, ge=0),
    page_size: int = Query(10, ge=1),
    current_user: UserDetails = Depends(membership),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_members_for_group(
        user_directory_id, group_name, filter, sort_direction, page_index, page_size
    )


@router.post("/groups/{group_name}/members", status_code=status.HTTP_204_NO_CONTENT)
async def add_member_to_group(
    user_directory_id: UUID,
    group_name: str,
    request: GroupMemberRequest,
    current_user: UserDetails = Depends(membership),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.add_member_to_group(
        user_directory_id, group_name, request.member_type, request.member_name
    )


@router.delete(
    "/groups/{group_name}/members/{member_type}/{member_name}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_member_from_group(
    user_directory_id: UUID,
    group_name: str,
    member_type: GroupMemberType,
    member_name: str,
    current_user: UserDetails = Depends(membership),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.remove_member_from_group(
        user_directory_id, group_name, member_type, member_name
    )


# ── roles ─────────────────────────────────────────────────────────────────


@router.get("/groups/{group_name}/roles", response_model=list[GroupRole])
async def get_roles_for_group(
    user_directory_id: UUID,
    group_name: str,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    return await service.get_roles_for_group(user_directory_id, group_name)


@router.post("/groups/{group_name}/roles", status_code=status.HTTP_204_NO_CONTENT)
async def add_role_to_group(
    user_directory_id: UUID,
    group_name: str,
    request: GroupRoleRequest,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.add_role_to_group(user_directory_id, group_name, request.role_code)


@router.delete(
    "/groups/{group_name}/roles/{role_code}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_role_from_group(
    user_directory_id: UUID,
    group_name: str,
    role_code: str,
    current_user: UserDetails = Depends(administration),
    service: SecurityService = Depends(get_security_service),
):
    ensure_user_directory_access(current_user, user_directory_id)
    await service.remove_role_from_group(user_directory_id, group_name, role_code)
