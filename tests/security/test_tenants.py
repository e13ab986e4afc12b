"""Tenant service operations."""

import uuid

import pytest

from warden.exceptions import (
    DuplicateTenantError,
    ExistingTenantUserDirectoryError,
    TenantNotFoundError,
    TenantUserDirectoryNotFoundError,
    UserDirectoryNotFoundError,
)
from warden.models.pydantic_models import TenantModel, UserDirectoryModel
from warden.models.security import SortDirection, TenantStatus


async def test_create_tenant_with_user_directory(security_service):
    tenant, user_directory = await security_service.create_tenant(
        TenantModel(name="Acme"), create_user_directory=True
    )
    assert tenant.status == TenantStatus.ACTIVE
    assert user_directory.name == "Acme Internal User Directory"
    assert user_directory.type == "InternalUserDirectory"
    assert user_directory.get_parameter("maxpasswordattempts") == "5"

    assert await security_service.get_user_directory_ids_for_tenant(tenant.tenant_id) == [
        user_directory.user_directory_id
    ]
    assert await security_service.get_tenant_ids_for_user_directory(
        user_directory.user_directory_id
    ) == [tenant.tenant_id]


async def test_create_tenant_without_user_directory(security_service):
    tenant, user_directory = await security_service.create_tenant(TenantModel(name="Acme"))
    assert user_directory is None
    assert await security_service.get_user_directories_for_tenant(tenant.tenant_id) == []


async def test_create_tenant_duplicate_name_ignores_case(security_service):
    await security_service.create_tenant(TenantModel(name="Acme"))
    with pytest.raises(DuplicateTenantError):
        await security_service.create_tenant(TenantModel(name="ACME"))


async def test_create_tenant_duplicate_id(security_service):
    tenant_id = uuid.uuid4()
    await security_service.create_tenant(TenantModel(tenant_id=tenant_id, name="One"))
    with pytest.raises(DuplicateTenantError):
        await security_service.create_tenant(TenantModel(tenant_id=tenant_id, name="Two"))


async def test_update_and_get_tenant(security_service):
    tenant, _ = await security_service.create_tenant(TenantModel(name="Acme"))
    await security_service.update_tenant(
        TenantModel(tenant_id=tenant.tenant_id, name="Acme Corp", status=TenantStatus.INACTIVE)
    )

    updated = await security_service.get_tenant(tenant.tenant_id)
    assert updated.name == "Acme Corp"
    assert updated.status == TenantStatus.INACTIVE
    assert await security_service.get_tenant_name(tenant.tenant_id) == "Acme Corp"


async def test_missing_tenant(security_service):
    missing = uuid.uuid4()
    with pytest.raises(TenantNotFoundError):
        await security_service.get_tenant(missing)
    with pytest.raises(TenantNotFoundError):
        await security_service.get_tenant_name(missing)
    with pytest.raises(TenantNotFoundError):
        await security_service.delete_tenant(missing)
    with pytest.raises(TenantNotFoundError):
        await security_service.update_tenant(TenantModel(tenant_id=missing, name="Nobody"))


async def test_delete_tenant_removes_mappings(security_service):
    tenant, user_directory = await security_service.create_tenant(
        TenantModel(name="Acme"), create_user_directory=True
    )
    await security_service.delete_tenant(tenant.tenant_id)

    with pytest.raises(TenantNotFoundError):
        await security_service.get_tenant(tenant.tenant_id)
    assert (
        await security_service.get_tenant_ids_for_user_directory(user_directory.user_directory_id)
        == []
    )


async def test_get_tenants_filters_sorts_and_pages(security_service):
    for name in ("Alpha", "Beta", "Gamma", "Alphabet"):
        await security_service.create_tenant(TenantModel(name=name))

    tenants = await security_service.get_tenants(filter="alp")
    assert tenants.total == 2
    assert [t.name for t in tenants.tenants] == ["Alpha", "Alphabet"]

    page = await security_service.get_tenants(
        sort_direction=SortDirection.DESCENDING, page_index=1, page_size=2
    )
    assert page.total == 4
    assert [t.name for t in page.tenants] == ["Alphabet", "Alpha"]
    assert page.page_index == 1
    assert page.page_size == 2


async def test_add_and_remove_user_directory(security_service):
    tenant, _ = await security_service.create_tenant(TenantModel(name="Acme"))
    user_directory = await security_service.create_user_directory(
        UserDirectoryModel(type="InternalUserDirectory", name="Shared")
    )

    await security_service.add_user_directory_to_tenant(
        tenant.tenant_id, user_directory.user_directory_id
    )
    with pytest.raises(ExistingTenantUserDirectoryError):
        await security_service.add_user_directory_to_tenant(
            tenant.tenant_id, user_directory.user_directory_id
        )

    summaries = await security_service.get_user_directory_summaries_for_tenant(tenant.tenant_id)
    assert [s.name for s in summaries] == ["Shared"]
    tenants = await security_service.get_tenants_for_user_directory(
        user_directory.user_directory_id
    )
    assert [t.name for t in tenants] == ["Acme"]

    await security_service.remove_user_directory_from_tenant(
        tenant.tenant_id, user_directory.user_directory_id
    )
    with pytest.raises(TenantUserDirectoryNotFoundError):
        await security_service.remove_user_directory_from_tenant(
            tenant.tenant_id, user_directory.user_directory_id
        )


async def test_add_missing_user_directory_to_tenant(security_service):
    tenant, _ = await security_service.create_tenant(TenantModel(name="Acme"))
    with pytest.raises(UserDirectoryNotFoundError):
        await security_service.add_user_directory_to_tenant(tenant.tenant_id, uuid.uuid4())
