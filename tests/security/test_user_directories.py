"""User directory service operations and the directory type registry."""

import uuid

import pytest

from warden.exceptions import (
    DuplicateUserDirectoryError,
    ExistingGroupsError,
    ExistingUsersError,
    UserDirectoryNotFoundError,
    UserDirectoryTypeNotFoundError,
    UserNotFoundError,
)
from warden.models.pydantic_models import (
    TenantModel,
    UserDirectoryModel,
    UserDirectoryParameter,
)
from warden.security.directories import InternalUserDirectory, get_user_directory_type


def test_internal_type_is_registered():
    directory_type = get_user_directory_type("InternalUserDirectory")
    assert directory_type.name == "Internal User Directory"
    assert directory_type.provider_class is InternalUserDirectory


def test_unknown_type():
    with pytest.raises(UserDirectoryTypeNotFoundError):
        get_user_directory_type("LDAPUserDirectory")


async def test_create_user_directory(security_service):
    user_directory = await security_service.create_user_directory(
        UserDirectoryModel(
            type="InternalUserDirectory",
            name="Staff",
            parameters=[UserDirectoryParameter(name="MaxPasswordAttempts", value="3")],
        )
    )
    loaded = await security_service.get_user_directory(user_directory.user_directory_id)
    assert loaded.get_parameter("MaxPasswordAttempts") == "3"
    assert await security_service.get_user_directory_name(user_directory.user_directory_id) == (
        "Staff"
    )

    directory_type = await security_service.get_user_directory_type_for_user_directory(
        user_directory.user_directory_id
    )
    assert directory_type.code == "InternalUserDirectory"


async def test_create_user_directory_rejects_unknown_type(security_service):
    with pytest.raises(UserDirectoryTypeNotFoundError):
        await security_service.create_user_directory(
            UserDirectoryModel(type="Nope", name="Staff")
        )


async def test_create_user_directory_duplicate_name(security_service):
    await security_service.create_user_directory(
        UserDirectoryModel(type="InternalUserDirectory", name="Staff")
    )
    with pytest.raises(DuplicateUserDirectoryError):
        await security_service.create_user_directory(
            UserDirectoryModel(type="InternalUserDirectory", name="staff")
        )


async def test_update_user_directory(security_service, user_directory):
    await security_service.update_user_directory(
        UserDirectoryModel(
            user_directory_id=user_directory.user_directory_id,
            type="InternalUserDirectory",
            name="Renamed",
            parameters=[UserDirectoryParameter(name="PasswordExpiryMonths", value="1")],
        )
    )
    loaded = await security_service.get_user_directory(user_directory.user_directory_id)
    assert loaded.name == "Renamed"
    assert loaded.get_parameter("PasswordExpiryMonths") == "1"
    assert loaded.get_parameter("MaxPasswordAttempts") is None


async def test_delete_user_directory_with_users(security_service, user_directory, user_factory):
    await user_factory()
    with pytest.raises(ExistingUsersError):
        await security_service.delete_user_directory(user_directory.user_directory_id)


async def test_delete_user_directory_with_groups(security_service, user_directory, group_factory):
    await group_factory()
    with pytest.raises(ExistingGroupsError):
        await security_service.delete_user_directory(user_directory.user_directory_id)


async def test_delete_empty_user_directory(security_service, user_directory):
    await security_service.delete_user_directory(user_directory.user_directory_id)
    with pytest.raises(UserDirectoryNotFoundError):
        await security_service.get_user_directory(user_directory.user_directory_id)


async def test_missing_user_directory(security_service):
    missing = uuid.uuid4()
    with pytest.raises(UserDirectoryNotFoundError):
        await security_service.get_user_directory_name(missing)
    with pytest.raises(UserDirectoryNotFoundError):
        await security_service.get_user_directory_capabilities(missing)
    with pytest.raises(UserDirectoryNotFoundError):
        await security_service.get_users(missing)


async def test_capabilities(security_service, user_directory):
    capabilities = await security_service.get_user_directory_capabilities(
        user_directory.user_directory_id
    )
    assert capabilities.supports_user_administration
    assert capabilities.supports_password_history
    assert capabilities.supports_user_locks


async def test_user_directory_summaries(security_service):
    for name in ("Partners", "Staff", "Contractors"):
        await security_service.create_user_directory(
            UserDirectoryModel(type="InternalUserDirectory", name=name)
        )

    summaries = await security_service.get_user_directory_summaries(filter="a")
    assert [s.name for s in summaries.user_directory_summaries] == [
        "Contractors",
        "Partners",
        "Staff",
    ]

    page = await security_service.get_user_directory_summaries(page_index=0, page_size=1)
    assert page.total == 3
    assert [s.name for s in page.user_directory_summaries] == ["Contractors"]


async def test_user_directory_ids_for_user_span_tenant(security_service, user_factory):
    tenant, user_directory = await security_service.create_tenant(
        TenantModel(name="Acme"), create_user_directory=True
    )
    partners = await security_service.create_user_directory(
        UserDirectoryModel(type="InternalUserDirectory", name="Acme Partners")
    )
    await security_service.add_user_directory_to_tenant(
        tenant.tenant_id, partners.user_directory_id
    )
    await user_factory(username="alice", user_directory_id=user_directory.user_directory_id)

    assert await security_service.get_user_directory_id_for_user("ALICE") == (
        user_directory.user_directory_id
    )
    assert set(await security_service.get_user_directory_ids_for_user("alice")) == {
        user_directory.user_directory_id,
        partners.user_directory_id,
    }


async def test_user_directory_ids_for_user_without_tenant(security_service, user_factory):
    standalone = await security_service.create_user_directory(
        UserDirectoryModel(type="InternalUserDirectory", name="Standalone")
    )
    await user_factory(username="hermit", user_directory_id=standalone.user_directory_id)

    assert await security_service.get_user_directory_id_for_user("hermit") == (
        standalone.user_directory_id
    )
    assert await security_service.get_user_directory_ids_for_user("hermit") == []


async def test_user_directory_ids_for_unknown_user(security_service):
    assert await security_service.get_user_directory_id_for_user("nobody") is None
    with pytest.raises(UserNotFoundError):
        await security_service.get_user_directory_ids_for_user("nobody")
