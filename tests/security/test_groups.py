"""Groups, group membership and group roles."""

import pytest

from warden.exceptions import (
    DuplicateGroupError,
    ExistingGroupMemberError,
    ExistingGroupMembersError,
    ExistingGroupRoleError,
    GroupMemberNotFoundError,
    GroupNotFoundError,
    GroupRoleNotFoundError,
    InvalidArgumentError,
    RoleNotFoundError,
    UserNotFoundError,
)
from warden.models.pydantic_models import GroupModel
from warden.models.security import GroupMemberType, SortDirection

USER = GroupMemberType.USER


async def test_create_and_get_group(security_service, user_directory, group_factory):
    await group_factory(name="Engineers", description="Engineering")

    group = await security_service.get_group(user_directory.user_directory_id, "engineers")
    assert group.name == "Engineers"
    assert group.description == "Engineering"


async def test_create_duplicate_group(group_factory):
    await group_factory(name="Engineers")
    with pytest.raises(DuplicateGroupError):
        await group_factory(name="ENGINEERS")


async def test_update_group(security_service, user_directory, group_factory):
    await group_factory(name="Engineers")
    await security_service.update_group(
        GroupModel(
            user_directory_id=user_directory.user_directory_id,
            name="Engineers",
            description="Builders",
        )
    )
    group = await security_service.get_group(user_directory.user_directory_id, "Engineers")
    assert group.description == "Builders"


async def test_missing_group(security_service, user_directory):
    user_directory_id = user_directory.user_directory_id
    with pytest.raises(GroupNotFoundError):
        await security_service.get_group(user_directory_id, "Nobody")
    with pytest.raises(GroupNotFoundError):
        await security_service.delete_group(user_directory_id, "Nobody")
    with pytest.raises(GroupNotFoundError):
        await security_service.update_group(
            GroupModel(user_directory_id=user_directory_id, name="Nobody")
        )


async def test_delete_group_with_members(
    security_service, user_directory, group_factory, user_factory
):
    await group_factory(name="Engineers")
    await user_factory(username="alice")
    await security_service.add_user_to_group(
        user_directory.user_directory_id, "Engineers", "alice"
    )

    with pytest.raises(ExistingGroupMembersError):
        await security_service.delete_group(user_directory.user_directory_id, "Engineers")

    await security_service.remove_user_from_group(
        user_directory.user_directory_id, "Engineers", "alice"
    )
    await security_service.delete_group(user_directory.user_directory_id, "Engineers")
    assert await security_service.get_group_names(user_directory.user_directory_id) == []


async def test_group_names_and_paging(security_service, user_directory, group_factory):
    for name in ("Sales", "Engineers", "Support"):
        await group_factory(name=name)

    assert await security_service.get_group_names(user_directory.user_directory_id) == [
        "Engineers",
        "Sales",
        "Support",
    ]

    groups = await security_service.get_groups(
        user_directory.user_directory_id,
        filter="s",
        sort_direction=SortDirection.DESCENDING,
        page_index=0,
        page_size=2,
    )
    assert groups.total == 3
    assert [g.name for g in groups.groups] == ["Support", "Sales"]


# ── membership ───────────────────────────────────────────────────────


async def test_add_user_to_group_is_idempotent(
    security_service, user_directory, group_factory, user_factory
):
    user_directory_id = user_directory.user_directory_id
    await group_factory(name="Engineers")
    await user_factory(username="alice")

    await security_service.add_user_to_group(user_directory_id, "Engineers", "alice")
    await security_service.add_user_to_group(user_directory_id, "Engineers", "ALICE")

    assert await security_service.is_user_in_group(user_directory_id, "Engineers", "alice")
    assert await security_service.get_group_names_for_user(user_directory_id, "alice") == [
        "Engineers"
    ]
    groups = await security_service.get_groups_for_user(user_directory_id, "alice")
    assert [g.name for g in groups] == ["Engineers"]


async def test_add_member_to_group(
    security_service, user_directory, group_factory, user_factory
):
    user_directory_id = user_directory.user_directory_id
    await group_factory(name="Engineers")
    await user_factory(username="alice")
    await user_factory(username="bob")

    await security_service.add_member_to_group(user_directory_id, "Engineers", USER, "alice")
    await security_service.add_member_to_group(user_directory_id, "Engineers", USER, "bob")
    with pytest.raises(ExistingGroupMemberError):
        await security_service.add_member_to_group(user_directory_id, "Engineers", USER, "bob")

    members = await security_service.get_members_for_group(
        user_directory_id, "Engineers", sort_direction=SortDirection.DESCENDING
    )
    assert members.total == 2
    assert [m.member_name for m in members.group_members] == ["bob", "alice"]
    assert all(m.member_type == USER for m in members.group_members)

    members = await security_service.get_members_for_group(
        user_directory_id, "Engineers", filter="ali"
    )
    assert [m.member_name for m in members.group_members] == ["alice"]


async def test_add_group_member_type_is_rejected(
    security_service, user_directory, group_factory
):
    await group_factory(name="Engineers")
    await group_factory(name="Admins")
    with pytest.raises(InvalidArgumentError):
        await security_service.add_member_to_group(
            user_directory.user_directory_id, "Engineers", GroupMemberType.GROUP, "Admins"
        )


async def test_add_unknown_user_to_group(security_service, user_directory, group_factory):
    await group_factory(name="Engineers")
    with pytest.raises(UserNotFoundError):
        await security_service.add_member_to_group(
            user_directory.user_directory_id, "Engineers", USER, "nobody"
        )


async def test_remove_member_from_group(
    security_service, user_directory, group_factory, user_factory
):
    user_directory_id = user_directory.user_directory_id
    await group_factory(name="Engineers")
    await user_factory(username="alice")
    await security_service.add_member_to_group(user_directory_id, "Engineers", USER, "alice")

    await security_service.remove_member_from_group(user_directory_id, "Engineers", USER, "alice")
    assert not await security_service.is_user_in_group(user_directory_id, "Engineers", "alice")

    with pytest.raises(GroupMemberNotFoundError):
        await security_service.remove_member_from_group(
            user_directory_id, "Engineers", USER, "alice"
        )
    with pytest.raises(GroupMemberNotFoundError):
        await security_service.remove_member_from_group(
            user_directory_id, "Engineers", USER, "nobody"
        )


async def test_deleting_user_removes_membership(
    security_service, user_directory, group_factory, user_factory
):
    user_directory_id = user_directory.user_directory_id
    await group_factory(name="Engineers")
    await user_factory(username="alice")
    await security_service.add_user_to_group(user_directory_id, "Engineers", "alice")

    await security_service.delete_user(user_directory_id, "alice")
    await security_service.delete_group(user_directory_id, "Engineers")


# ── roles ────────────────────────────────────────────────────────────


async def test_group_roles(security_service, user_directory, group_factory, role_factory):
    user_directory_id = user_directory.user_directory_id
    await group_factory(name="Engineers")
    await role_factory("Developer")
    await role_factory("Reviewer")

    await security_service.add_role_to_group(user_directory_id, "Engineers", "Reviewer")
    await security_service.add_role_to_group(user_directory_id, "Engineers", "Developer")
    with pytest.raises(ExistingGroupRoleError):
        await security_service.add_role_to_group(user_directory_id, "Engineers", "Developer")

    assert await security_service.get_role_codes_for_group(user_directory_id, "Engineers") == [
        "Developer",
        "Reviewer",
    ]
    roles = await security_service.get_roles_for_group(user_directory_id, "Engineers")
    assert [(r.group_name, r.role_code) for r in roles] == [
        ("Engineers", "Developer"),
        ("Engineers", "Reviewer"),
    ]

    await security_service.remove_role_from_group(user_directory_id, "Engineers", "Reviewer")
    with pytest.raises(GroupRoleNotFoundError):
        await security_service.remove_role_from_group(user_directory_id, "Engineers", "Reviewer")


async def test_add_unknown_role_to_group(security_service, user_directory, group_factory):
    await group_factory(name="Engineers")
    with pytest.raises(RoleNotFoundError):
        await security_service.add_role_to_group(
            user_directory.user_directory_id, "Engineers", "Nope"
        )
