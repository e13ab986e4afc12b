"""
Delivery of password reset security codes.
"""

from typing import Protocol, runtime_checkable
import logging

from warden.models.security import User

logger = logging.getLogger(__name__)


@runtime_checkable
class PasswordResetNotifier(Protocol):
    async def send_password_reset(
        self, user: User, security_code: str, reset_password_url: str
    ) -> None: ...


class LoggingPasswordResetNotifier:
    """Default notifier: records that a reset was requested, never the code."""

    async def send_password_reset(
        self, user: User, security_code: str, reset_password_url: str
    ) -> None:
        logger.info(
            f"Password reset requested for the user ({user.username}), "
            f"reset URL ({reset_password_url})"
        )
