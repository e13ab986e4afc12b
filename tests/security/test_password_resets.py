"""Password reset initiation and completion."""

import pytest
from sqlalchemy import select

from warden.exceptions import InvalidSecurityCodeError, UserNotFoundError
from warden.models.security import PasswordReset, PasswordResetStatus
from warden.security.passwords import hash_security_code

RESET_URL = "https://example.com/reset-password"


async def _resets(db_session) -> dict[str, PasswordReset]:
    result = await db_session.execute(select(PasswordReset))
    return {reset.security_code_hash: reset for reset in result.scalars().all()}


async def test_initiate_password_reset_notifies(
    security_service, notifier, user_factory, db_session
):
    await user_factory(username="alice")
    await security_service.initiate_password_reset("alice", RESET_URL)

    assert len(notifier.sent) == 1
    sent = notifier.sent[0]
    assert sent["username"] == "alice"
    assert sent["reset_password_url"] == RESET_URL
    assert len(sent["security_code"]) == 8
    assert sent["security_code"].isalnum()

    resets = await _resets(db_session)
    reset = resets[hash_security_code(sent["security_code"])]
    assert reset.status == PasswordResetStatus.REQUESTED
    assert reset.requested is not None


async def test_initiate_password_reset_without_email(security_service, notifier, user_factory):
    await user_factory(username="alice")
    await security_service.initiate_password_reset("alice", RESET_URL, send_email=False)
    assert notifier.sent == []


async def test_initiate_password_reset_unknown_user(security_service):
    with pytest.raises(UserNotFoundError):
        await security_service.initiate_password_reset("nobody", RESET_URL)


async def test_reset_password(security_service, user_factory, db_session):
    await user_factory(username="alice", password="Secret1")
    await security_service.initiate_password_reset("alice", RESET_URL, security_code="FIRST")
    await security_service.initiate_password_reset("alice", RESET_URL, security_code="SECOND")

    await security_service.reset_password("alice", "Secret2", "SECOND")

    await security_service.authenticate("alice", "Secret2")

    db_session.expunge_all()
    resets = await _resets(db_session)
    assert resets[hash_security_code("SECOND")].status == PasswordResetStatus.COMPLETED
    assert resets[hash_security_code("SECOND")].completed is not None
    assert resets[hash_security_code("FIRST")].status == PasswordResetStatus.EXPIRED
    assert resets[hash_security_code("FIRST")].expired is not None


async def test_reset_password_code_is_single_use(security_service, user_factory):
    await user_factory(username="alice", password="Secret1")
    await security_service.initiate_password_reset("alice", RESET_URL, security_code="ONLY")
    await security_service.reset_password("alice", "Secret2", "ONLY")

    with pytest.raises(InvalidSecurityCodeError):
        await security_service.reset_password("alice", "Secret3", "ONLY")


async def test_reset_password_wrong_code(security_service, user_factory):
    await user_factory(username="alice", password="Secret1")
    await security_service.initiate_password_reset("alice", RESET_URL, security_code="RIGHT")

    with pytest.raises(InvalidSecurityCodeError):
        await security_service.reset_password("alice", "Secret2", "WRONG")

    await security_service.authenticate("alice", "Secret1")


async def test_reset_password_unknown_user(security_service):
    with pytest.raises(InvalidSecurityCodeError):
        await security_service.reset_password("nobody", "Secret2", "CODE")
