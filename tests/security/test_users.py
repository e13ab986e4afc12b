"""User administration, authentication and password policy of the internal directory."""

from datetime import timedelta

import pytest

from warden.exceptions import (
    AuthenticationFailedError,
    DuplicateUserError,
    ExistingPasswordError,
    ExpiredPasswordError,
    InvalidArgumentError,
    UserLockedError,
    UserNotFoundError,
)
from warden.models.pydantic_models import (
    UserDirectoryModel,
    UserDirectoryParameter,
    UserRequest,
)
from warden.models.security import SortDirection, UserSortBy, UserStatus
from warden.security.passwords import verify_password
from warden.utils import as_utc, utc_now


async def test_create_user(security_service, user_directory, user_factory):
    user = await user_factory(username="alice", password="Secret1", email="alice@example.com")

    assert user.status == UserStatus.ACTIVE
    assert user.password != "Secret1"
    assert verify_password("Secret1", user.password)
    assert user.password_attempts == 0
    assert as_utc(user.password_expiry) > utc_now() + timedelta(days=300)

    history = await security_service.users.get_password_history(
        user.user_id, utc_now() - timedelta(days=1)
    )
    assert history == [user.password]

    loaded = await security_service.get_user(user_directory.user_directory_id, "ALICE")
    assert loaded.email == "alice@example.com"
    assert await security_service.is_existing_user(user_directory.user_directory_id, "Alice")


async def test_create_duplicate_user(user_factory):
    await user_factory(username="alice")
    with pytest.raises(DuplicateUserError):
        await user_factory(username="ALICE")


async def test_same_username_in_different_directories(security_service, user_factory):
    other = await security_service.create_user_directory(
        UserDirectoryModel(type="InternalUserDirectory", name="Other")
    )
    await user_factory(username="alice")
    user = await user_factory(username="alice", user_directory_id=other.user_directory_id)
    assert user.user_directory_id == other.user_directory_id


async def test_update_user_applies_set_fields(security_service, user_directory, user_factory):
    await user_factory(username="alice", name="Alice", email="alice@example.com")

    await security_service.update_user(
        UserRequest(
            user_directory_id=user_directory.user_directory_id,
            username="alice",
            preferred_name="Al",
            status=UserStatus.INACTIVE,
        )
    )

    user = await security_service.get_user(user_directory.user_directory_id, "alice")
    assert user.name == "Alice"
    assert user.email == "alice@example.com"
    assert user.preferred_name == "Al"
    assert user.status == UserStatus.INACTIVE


async def test_update_user_lock_and_expire(security_service, user_directory, user_factory):
    await user_factory(username="alice")
    await security_service.update_user(
        UserRequest(user_directory_id=user_directory.user_directory_id, username="alice"),
        expire_password=True,
        lock_user=True,
    )
    user = await security_service.get_user(user_directory.user_directory_id, "alice")
    assert user.is_locked(5)
    assert user.has_password_expired()


async def test_update_missing_user(security_service, user_directory):
    with pytest.raises(UserNotFoundError):
        await security_service.update_user(
            UserRequest(user_directory_id=user_directory.user_directory_id, username="nobody")
        )


async def test_delete_user(security_service, user_directory, user_factory):
    await user_factory(username="alice")
    await security_service.delete_user(user_directory.user_directory_id, "alice")

    with pytest.raises(UserNotFoundError):
        await security_service.get_user(user_directory.user_directory_id, "alice")
    with pytest.raises(UserNotFoundError):
        await security_service.delete_user(user_directory.user_directory_id, "alice")


async def test_get_user_name(security_service, user_directory, user_factory):
    await user_factory(username="alice", name="Alice Smith")
    assert await security_service.get_user_name(user_directory.user_directory_id, "alice") == (
        "Alice Smith"
    )
    with pytest.raises(UserNotFoundError):
        await security_service.get_user_name(user_directory.user_directory_id, "bob")


# ── listing ──────────────────────────────────────────────────────────


async def test_get_users_filter_sort_page(security_service, user_directory, user_factory):
    await user_factory(username="alice", name="Alice Smith")
    await user_factory(username="bob", name="Bob Jones")
    await user_factory(username="carol", name="Carol Smith")

    users = await security_service.get_users(user_directory.user_directory_id, filter="smith")
    assert users.total == 2
    assert [u.username for u in users.users] == ["alice", "carol"]

    users = await security_service.get_users(
        user_directory.user_directory_id,
        sort_by=UserSortBy.USERNAME,
        sort_direction=SortDirection.DESCENDING,
        page_index=0,
        page_size=2,
    )
    assert users.total == 3
    assert [u.username for u in users.users] == ["carol", "bob"]


async def test_get_users_page_size_capped(security_service, user_factory):
    capped = await security_service.create_user_directory(
        UserDirectoryModel(
            type="InternalUserDirectory",
            name="Capped",
            parameters=[UserDirectoryParameter(name="MaxFilteredUsers", value="2")],
        )
    )
    for username in ("a1", "a2", "a3"):
        await user_factory(username=username, user_directory_id=capped.user_directory_id)

    users = await security_service.get_users(capped.user_directory_id, page_size=50)
    assert users.total == 3
    assert len(users.users) == 2


async def test_find_users(security_service, user_directory, user_factory):
    await user_factory(username="alice", email="alice@example.com")
    await user_factory(username="bob", email="bob@example.org")

    users = await security_service.find_users(
        user_directory.user_directory_id, {"email": "EXAMPLE.COM"}
    )
    assert [u.username for u in users] == ["alice"]

    with pytest.raises(InvalidArgumentError):
        await security_service.find_users(user_directory.user_directory_id, {"password": "x"})


# ── authentication ───────────────────────────────────────────────────


async def test_authenticate(security_service, user_directory, user_factory):
    await user_factory(username="alice", password="Secret1")
    assert await security_service.authenticate("ALICE", "Secret1") == (
        user_directory.user_directory_id
    )


async def test_authenticate_unknown_user(security_service):
    with pytest.raises(UserNotFoundError):
        await security_service.authenticate("nobody", "Secret1")


async def test_failed_attempts_lock_the_user(security_service, user_directory, user_factory):
    await user_factory(username="alice", password="Secret1")

    for _ in range(5):
        with pytest.raises(AuthenticationFailedError):
            await security_service.authenticate("alice", "wrong")

    user = await security_service.get_user(user_directory.user_directory_id, "alice")
    assert user.password_attempts == 5

    with pytest.raises(UserLockedError):
        await security_service.authenticate("alice", "Secret1")


async def test_authenticate_locked_user(security_service, user_factory):
    await user_factory(username="alice", password="Secret1", user_locked=True)
    with pytest.raises(UserLockedError):
        await security_service.authenticate("alice", "Secret1")


async def test_authenticate_expired_password(security_service, user_factory):
    await user_factory(username="alice", password="Secret1", expired_password=True)
    with pytest.raises(ExpiredPasswordError):
        await security_service.authenticate("alice", "Secret1")


async def test_unlimited_attempts_never_increment(security_service, user_directory, user_factory):
    await user_factory(username="alice", password="Secret1")
    await security_service.update_user(
        UserRequest(
            user_directory_id=user_directory.user_directory_id,
            username="alice",
            password_attempts=-1,
        )
    )

    with pytest.raises(AuthenticationFailedError):
        await security_service.authenticate("alice", "wrong")

    user = await security_service.get_user(user_directory.user_directory_id, "alice")
    assert user.password_attempts == -1


# ── passwords ────────────────────────────────────────────────────────


async def test_change_password(security_service, user_directory, user_factory):
    await user_factory(username="alice", password="Secret1")

    assert await security_service.change_password("alice", "Secret1", "Secret2") == (
        user_directory.user_directory_id
    )

    await security_service.authenticate("alice", "Secret2")
    with pytest.raises(AuthenticationFailedError):
        await security_service.authenticate("alice", "Secret1")


async def test_change_password_wrong_current(security_service, user_factory):
    await user_factory(username="alice", password="Secret1")
    with pytest.raises(AuthenticationFailedError):
        await security_service.change_password("alice", "wrong", "Secret2")


async def test_change_password_unknown_user(security_service):
    with pytest.raises(AuthenticationFailedError):
        await security_service.change_password("nobody", "Secret1", "Secret2")


async def test_change_password_rejects_recent_password(security_service, user_factory):
    await user_factory(username="alice", password="Secret1")
    await security_service.change_password("alice", "Secret1", "Secret2")

    with pytest.raises(ExistingPasswordError):
        await security_service.change_password("alice", "Secret2", "Secret1")


async def test_change_password_locked_user(security_service, user_factory):
    await user_factory(username="alice", password="Secret1", user_locked=True)
    with pytest.raises(UserLockedError):
        await security_service.change_password("alice", "Secret1", "Secret2")


async def test_change_password_clears_attempts_and_expiry(
    security_service, user_directory, user_factory
):
    await user_factory(username="alice", password="Secret1", expired_password=True)
    with pytest.raises(AuthenticationFailedError):
        await security_service.authenticate("alice", "wrong")

    await security_service.change_password("alice", "Secret1", "Secret2")

    user = await security_service.get_user(user_directory.user_directory_id, "alice")
    assert user.password_attempts == 0
    assert not user.has_password_expired()


async def test_admin_change_password(security_service, user_directory, user_factory):
    await user_factory(username="alice", password="Secret1")

    await security_service.admin_change_password(
        user_directory.user_directory_id, "alice", "Secret2", expire_password=True
    )
    with pytest.raises(ExpiredPasswordError):
        await security_service.authenticate("alice", "Secret2")

    await security_service.admin_change_password(
        user_directory.user_directory_id, "alice", "Secret3", lock_user=True
    )
    with pytest.raises(UserLockedError):
        await security_service.authenticate("alice", "Secret3")


async def test_admin_change_password_reset_history(
    security_service, user_directory, user_factory
):
    user = await user_factory(username="alice", password="Secret1")
    await security_service.change_password("alice", "Secret1", "Secret2")

    await security_service.admin_change_password(
        user_directory.user_directory_id, "alice", "Secret3", reset_password_history=True
    )

    history = await security_service.users.get_password_history(
        user.user_id, utc_now() - timedelta(days=1)
    )
    assert len(history) == 1
    await security_service.change_password("alice", "Secret3", "Secret1")


async def test_admin_change_password_unknown_user(security_service, user_directory):
    with pytest.raises(UserNotFoundError):
        await security_service.admin_change_password(
            user_directory.user_directory_id, "nobody", "Secret1"
        )
