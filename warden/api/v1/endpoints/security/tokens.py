from fastapi import APIRouter, Depends, Query, status

from warden.api.v1.deps import get_security_service
from warden.models.pydantic_models import (
    GenerateTokenRequest,
    TokenModel,
    TokenSummaries,
    TokenSummary,
)
from warden.models.security import SortDirection, TokenSortBy, TokenStatus
from warden.security.authentication import require_function
from warden.security.functions import TOKEN_ADMINISTRATION
from warden.services.security_service import SecurityService

router = APIRouter(
    tags=["Tokens"],
    dependencies=[Depends(require_function(TOKEN_ADMINISTRATION))],
)


@router.get("/tokens", response_model=TokenSummaries)
async def get_token_summaries(
    status_filter: TokenStatus | None = Query(None, alias="status"),
    filter: str | None = None,
    sort_by: TokenSortBy = TokenSortBy.NAME,
    sort_direction: SortDirection = SortDirection.ASCENDING,
    page_index: int = Query(0, ge=0),
    page_size: int = Query(10, ge=1),
    service: SecurityService = Depends(get_security_service),
):
    return await service.get_token_summaries(
        status_filter, filter, sort_by, sort_direction, page_index, page_size
    )


@router.post("/tokens", response_model=TokenModel)
async def generate_token(
    request: GenerateTokenRequest, service: SecurityService = Depends(get_security_service)
):
    """Generate and store a signed token. The serialized token is in ``data``."""
    return await service.generate_token(request)


@router.get("/revoked-tokens", response_model=list[TokenSummary])
async def get_revoked_tokens(service: SecurityService = Depends(get_security_service)):
    return await service.get_revoked_tokens()


@router.get("/tokens/{token_id}", response_model=TokenModel)
async def get_token(token_id: str, service: SecurityService = Depends(get_security_service)):
    return await service.get_token(token_id)


@router.delete("/tokens/{token_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_token(token_id: str, service: SecurityService = Depends(get_security_service)):
    await service.delete_token(token_id)


@router.post("/tokens/{token_id}/revoke", status_code=status.HTTP_204_NO_CONTENT)
async def revoke_token(token_id: str, service: SecurityService = Depends(get_security_service)):
    await service.revoke_token(token_id)


@router.post("/tokens/{token_id}/reinstate", status_code=status.HTTP_204_NO_CONTENT)
async def reinstate_token(
    token_id: str, service: SecurityService = Depends(get_security_service)
):
    await service.reinstate_token(token_id)
