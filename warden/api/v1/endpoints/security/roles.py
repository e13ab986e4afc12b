"""
Functions and roles. Administrators only.
"""

from fastapi import APIRouter, Depends, status

from warden.api.v1.deps import get_security_service
from warden.exceptions import InvalidArgumentError
from warden.models.pydantic_models import FunctionModel, RoleFunctionRequest, RoleModel
from warden.security.authentication import require_administrator
from warden.services.security_service import SecurityService

router = APIRouter(tags=["Roles"], dependencies=[Depends(require_administrator())])


@router.get("/functions", response_model=list[FunctionModel])
async def get_functions(service: SecurityService = Depends(get_security_service)):
    return await service.get_functions()


@router.post("/functions", status_code=status.HTTP_204_NO_CONTENT)
async def create_function(
    function: FunctionModel, service: SecurityService = Depends(get_security_service)
):
    await service.create_function(function)


@router.get("/functions/{function_code}", response_model=FunctionModel)
async def get_function(
    function_code: str, service: SecurityService = Depends(get_security_service)
):
    return await service.get_function(function_code)


@router.put("/functions/{function_code}", status_code=status.HTTP_204_NO_CONTENT)
async def update_function(
    function_code: str,
    function: FunctionModel,
    service: SecurityService = Depends(get_security_service),
):
    if function.code != function_code:
        raise InvalidArgumentError("function")
    await service.update_function(function)


@router.delete("/functions/{function_code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_function(
    function_code: str, service: SecurityService = Depends(get_security_service)
):
    await service.delete_function(function_code)


@router.get("/roles", response_model=list[RoleModel])
async def get_roles(service: SecurityService = Depends(get_security_service)):
    return await service.get_roles()


@router.post("/roles", status_code=status.HTTP_204_NO_CONTENT)
async def create_role(role: RoleModel, service: SecurityService = Depends(get_security_service)):
    await service.create_role(role)


@router.get("/roles/{role_code}", response_model=RoleModel)
async def get_role(role_code: str, service: SecurityService = Depends(get_security_service)):
    return await service.get_role(role_code)


@router.put("/roles/{role_code}", status_code=status.HTTP_204_NO_CONTENT)
async def update_role(
    role_code: str,
    role: RoleModel,
    service: SecurityService = Depends(get_security_service),
):
    if role.code != role_code:
        raise InvalidArgumentError("role")
    await service.update_role(role)


@router.delete("/roles/{role_code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(role_code: str, service: SecurityService = Depends(get_security_service)):
    await service.delete_role(role_code)


@router.get("/roles/{role_code}/function-codes", response_model=list[str])
async def get_function_codes_for_role(
    role_code: str, service: SecurityService = Depends(get_security_service)
):
    return await service.get_function_codes_for_role(role_code)


@router.post("/roles/{role_code}/functions", status_code=status.HTTP_204_NO_CONTENT)
async def add_function_to_role(
    role_code: str,
    request: RoleFunctionRequest,
    service: SecurityService = Depends(get_security_service),
):
    await service.add_function_to_role(role_code, request.function_code)


@router.delete(
    "/roles/{role_code}/functions/{function_code}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_function_from_role(
    role_code: str,
    function_code: str,
    service: SecurityService = Depends(get_security_service),
):
    await service.remove_function_from_role(role_code, function_code)
