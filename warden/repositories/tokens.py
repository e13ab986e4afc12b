from datetime import date

from sqlalchemy import and_, delete, or_, select, update

from warden.models.security import SortDirection, Token, TokenSortBy, TokenStatus
from .base import BaseRepository, contains_ignore_case, ordered

TOKEN_SORT_COLUMNS = {
    TokenSortBy.NAME: Token.name,
    TokenSortBy.TYPE: Token.type,
    TokenSortBy.ISSUED: Token.issued,
}


def status_condition(status: TokenStatus, today: date):
    """SQL equivalent of ``Token.get_status(today) == status``."""
    not_revoked = Token.revocation_date.is_(None)
    not_expired = or_(Token.expiry_date.is_(None), Token.expiry_date >= today)
    if status == TokenStatus.REVOKED:
        return Token.revocation_date.is_not(None)
    if status == TokenStatus.EXPIRED:
        return and_(not_revoked, Token.expiry_date < today)
    if status == TokenStatus.PENDING:
        return and_(not_revoked, not_expired, Token.valid_from_date > today)
    return and_(
        not_revoked,
        not_expired,
        or_(Token.valid_from_date.is_(None), Token.valid_from_date <= today),
    )


class TokenRepository(BaseRepository):
    model = Token

    async def get_name_by_id(self, token_id: str) -> str | None:
        return await self._first(select(Token.name).where(Token.token_id == token_id))

    async def delete_by_id(self, token_id: str) -> int:
        result = await self.db.execute(delete(Token).where(Token.token_id == token_id))
        return result.rowcount

    async def revoke_token(self, token_id: str, revocation_date: date) -> int:
        result = await self.db.execute(
            update(Token)
            .where(Token.token_id == token_id)
            .values(revocation_date=revocation_date)
        )
        return result.rowcount

    async def reinstate_token(self, token_id: str) -> int:
        result = await self.db.execute(
            update(Token).where(Token.token_id == token_id).values(revocation_date=None)
        )
        return result.rowcount

    async def get_revoked_tokens(self) -> list[Token]:
        return await self._scalars(
            select(Token)
            .where(Token.revocation_date.is_not(None))
            .order_by(Token.revocation_date.desc())
        )

    async def find_all(self) -> list[Token]:
        return await self._scalars(select(Token).order_by(Token.name))

    def _filtered(self, status: TokenStatus | None, filter: str | None, today: date):
        stmt = select(Token)
        if status is not None:
            stmt = stmt.where(status_condition(status, today))
        if filter:
            stmt = stmt.where(contains_ignore_case(Token.name, filter))
        return stmt

    async def find_filtered(
        self,
        status: TokenStatus | None = None,
        filter: str | None = None,
        sort_by: TokenSortBy | None = None,
        sort_direction: SortDirection | None = None,
        offset: int = 0,
        limit: int | None = None,
        today: date | None = None,
    ) -> list[Token]:
        column = TOKEN_SORT_COLUMNS.get(sort_by or TokenSortBy.NAME, Token.name)
        stmt = (
            self._filtered(status, filter, today or date.today())
            .order_by(ordered(column, sort_direction))
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._scalars(stmt)

    async def count_filtered(
        self,
        status: TokenStatus | None = None,
        filter: str | None = None,
        today: date | None = None,
    ) -> int:
        return await self._count(self._filtered(status, filter, today or date.today()))
