from sqlalchemy import select, update

from warden.models.security import PasswordReset, PasswordResetStatus
from warden.utils import utc_now
from .base import BaseRepository, equals_ignore_case


class PasswordResetRepository(BaseRepository):
    model = PasswordReset

    async def find_all_by_username_and_status(
        self, username: str, status: PasswordResetStatus
    ) -> list[PasswordReset]:
        return await self._scalars(
            select(PasswordReset)
            .where(equals_ignore_case(PasswordReset.username, username))
            .where(PasswordReset.status == status)
            .order_by(PasswordReset.requested.desc())
        )

    async def expire_password_resets(self, username: str, security_code_hash: str) -> int:
        """Expire every outstanding request for the user except the given one."""
        result = await self.db.execute(
            update(PasswordReset)
            .where(equals_ignore_case(PasswordReset.username, username))
            .where(PasswordReset.status == PasswordResetStatus.REQUESTED)
            .where(PasswordReset.security_code_hash != security_code_hash)
            .values(status=PasswordResetStatus.EXPIRED, expired=utc_now())
        )
        return result.rowcount

    async def complete(self, username: str, security_code_hash: str) -> int:
        result = await self.db.execute(
            update(PasswordReset)
            .where(PasswordReset.username == username)
            .where(PasswordReset.security_code_hash == security_code_hash)
            .values(status=PasswordResetStatus.COMPLETED, completed=utc_now())
        )
        return result.rowcount
