from fastapi import APIRouter, Depends, Query, status

from warden.api.v1.deps import get_security_service
from warden.exceptions import InvalidArgumentError
from warden.models.pydantic_models import PolicyModel, PolicySummaries
from warden.models.security import PolicySortBy, SortDirection
from warden.security.authentication import require_function
from warden.security.functions import POLICY_ADMINISTRATION
from warden.services.security_service import SecurityService

router = APIRouter(
    prefix="/policies",
    tags=["Policies"],
    dependencies=[Depends(require_function(POLICY_ADMINISTRATION))],
)


@router.get("", response_model=PolicySummaries)
async def get_policy_summaries(
    filter: str | None = None,
    sort_by: PolicySortBy = PolicySortBy.NAME,
    sort_direction: SortDirection = SortDirection.ASCENDING,
    page_index: int = Query(0, ge=0),
    page_size: int = Query(10, ge=1),
    service: SecurityService = Depends(get_security_service),
):
    return await service.get_policy_summaries(
        filter, sort_by, sort_direction, page_index, page_size
    )


@router.post("", status_code=status.HTTP_204_NO_CONTENT)
async def create_policy(
    policy: PolicyModel, service: SecurityService = Depends(get_security_service)
):
    await service.create_policy(policy)


@router.get("/{policy_id}", response_model=PolicyModel)
async def get_policy(policy_id: str, service: SecurityService = Depends(get_security_service)):
    return await service.get_policy(policy_id)


@router.get("/{policy_id}/name", response_model=str)
async def get_policy_name(
    policy_id: str, service: SecurityService = Depends(get_security_service)
):
    return await service.get_policy_name(policy_id)


@router.put("/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_policy(
    policy_id: str,
    policy: PolicyModel,
    service: SecurityService = Depends(get_security_service),
):
    if policy.policy_id != policy_id:
        raise InvalidArgumentError("policy")
    await service.update_policy(policy)


@router.delete("/{policy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_policy(
    policy_id: str, service: SecurityService = Depends(get_security_service)
):
    await service.delete_policy(policy_id)
