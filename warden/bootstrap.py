"""
First-run bootstrap: provision the Administration tenant, its internal user
directory, the security functions, the built-in roles and an administrator
when the database holds no tenants.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from warden.config import settings
from warden.models.pydantic_models import (
    FunctionModel,
    GroupModel,
    RoleModel,
    TenantModel,
    UserRequest,
)
from warden.models.security import Tenant
from warden.security.authentication import ADMINISTRATOR_ROLE_CODE
from warden.security.functions import RESET_USER_PASSWORD, SECURITY_FUNCTIONS
from warden.services.security_service import SecurityService

logger = logging.getLogger(__name__)

ADMINISTRATION_TENANT_NAME = "Administration"
ADMINISTRATORS_GROUP_NAME = "Administrators"
PASSWORD_RESETTER_ROLE_CODE = "PasswordResetter"


async def ensure_default_administrator(db: AsyncSession) -> None:
    """Provision the administrator on an empty database.

    Returns immediately if any tenant already exists. Every step runs in one
    transaction: a failure rolls back the whole provisioning, and the next
    startup tries again from an empty database.
    """
    result = await db.execute(select(Tenant).limit(1))
    if result.scalar_one_or_none() is not None:
        return

    service = SecurityService(db, autocommit=False)
    try:
        tenant = await _provision(service)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "=== FIRST RUN: provisioned administrator ===\n"
        "  tenant:         %s (id: %s)\n"
        "  username:       %s\n"
        "Change the administrator password after first login.",
        tenant.name,
        tenant.tenant_id,
        settings.administrator_username,
    )


async def _provision(service: SecurityService) -> Tenant:
    # ── tenant + directory ────────────────────────────────────────────
    tenant, user_directory = await service.create_tenant(
        TenantModel(name=ADMINISTRATION_TENANT_NAME), create_user_directory=True
    )
    user_directory_id = user_directory.user_directory_id

    # ── functions + roles ─────────────────────────────────────────────
    for code, name, description in SECURITY_FUNCTIONS:
        await service.create_function(FunctionModel(code=code, name=name, description=description))

    await service.create_role(
        RoleModel(code=ADMINISTRATOR_ROLE_CODE, name="Administrator", description="Administrator")
    )
    await service.create_role(
        RoleModel(
            code=PASSWORD_RESETTER_ROLE_CODE,
            name="Password Resetter",
            description="Password Resetter",
        )
    )
    await service.add_function_to_role(PASSWORD_RESETTER_ROLE_CODE, RESET_USER_PASSWORD)

    # ── group + user ──────────────────────────────────────────────────
    await service.create_group(
        GroupModel(
            user_directory_id=user_directory_id,
            name=ADMINISTRATORS_GROUP_NAME,
            description="Administrators",
        )
    )
    await service.add_role_to_group(
        user_directory_id, ADMINISTRATORS_GROUP_NAME, ADMINISTRATOR_ROLE_CODE
    )

    await service.create_user(
        UserRequest(
            user_directory_id=user_directory_id,
            username=settings.administrator_username,
            name="Administrator",
            preferred_name="Administrator",
            password=settings.administrator_password,
        )
    )
    await service.add_user_to_group(
        user_directory_id, ADMINISTRATORS_GROUP_NAME, settings.administrator_username
    )

    return tenant
