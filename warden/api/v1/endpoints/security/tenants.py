from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from warden.api.v1.deps import get_security_service
from warden.exceptions import InvalidArgumentError
from warden.models.pydantic_models import TenantModel, Tenants, UserDirectorySummary
from warden.models.security import SortDirection
from warden.security.authentication import require_function
from warden.security.functions import TENANT_ADMINISTRATION
from warden.services.security_service import SecurityService

router = APIRouter(
    prefix="/tenants",
    tags=["Tenants"],
    dependencies=[Depends(require_function(TENANT_ADMINISTRATION))],
)


class TenantUserDirectoryRequest(BaseModel):
    user_directory_id: UUID


@router.get("", response_model=Tenants)
async def get_tenants(
    filter: str | None = None,
    sort_direction: SortDirection = SortDirection.ASCENDING,
    page_index: int = Query(0, ge=0),
    page_size: int = Query(10, ge=1),
    service: SecurityService = Depends(get_security_service),
):
    return await service.get_tenants(filter, sort_direction, page_index, page_size)


@router.post("", status_code=status.HTTP_204_NO_CONTENT)
async def create_tenant(
    tenant: TenantModel,
    create_user_directory: bool = False,
    service: SecurityService = Depends(get_security_service),
):
    await service.create_tenant(tenant, create_user_directory)


@router.get("/{tenant_id}", response_model=TenantModel)
async def get_tenant(tenant_id: UUID, service: SecurityService = Depends(get_security_service)):
    return await service.get_tenant(tenant_id)


@router.get("/{tenant_id}/name", response_model=str)
async def get_tenant_name(
    tenant_id: UUID, service: SecurityService = Depends(get_security_service)
):
    return await service.get_tenant_name(tenant_id)


@router.put("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_tenant(
    tenant_id: UUID,
    tenant: TenantModel,
    service: SecurityService = Depends(get_security_service),
):
    if tenant.tenant_id is not None and tenant.tenant_id != tenant_id:
        raise InvalidArgumentError("tenant")
    await service.update_tenant(tenant.model_copy(update={"tenant_id": tenant_id}))


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tenant(tenant_id: UUID, service: SecurityService = Depends(get_security_service)):
    await service.delete_tenant(tenant_id)


@router.get(
    "/{tenant_id}/user-directory-summaries", response_model=list[UserDirectorySummary]
)
async def get_user_directory_summaries_for_tenant(
    tenant_id: UUID, service: SecurityService = Depends(get_security_service)
):
    return await service.get_user_directory_summaries_for_tenant(tenant_id)


@router.post("/{tenant_id}/user-directories", status_code=status.HTTP_204_NO_CONTENT)
async def add_user_directory_to_tenant(
    tenant_id: UUID,
    request: TenantUserDirectoryRequest,
    service: SecurityService = Depends(get_security_service),
):
    await service.add_user_directory_to_tenant(tenant_id, request.user_directory_id)


@router.delete(
    "/{tenant_id}/user-directories/{user_directory_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_user_directory_from_tenant(
    tenant_id: UUID,
    user_directory_id: UUID,
    service: SecurityService = Depends(get_security_service),
):
    await service.remove_user_directory_from_tenant(tenant_id, user_directory_id)
