"""
Token model for generated API tokens.

The status of a token is not stored. It is derived from the validity and
revocation dates every time it is read.
"""

from datetime import date

from sqlalchemy import Column, String, Date, DateTime, JSON, Text
from sqlalchemy.sql import func
from warden.db.base import Base
from .converters import CodeEnum
from .enums import TokenStatus, TokenType


class Token(Base):
    __tablename__ = "security_tokens"

    token_id = Column(String(50), primary_key=True, nullable=False)
    type = Column(CodeEnum(TokenType), nullable=False, default=TokenType.JWT)
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(200), nullable=False, default="")
    issued = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    valid_from_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)
    revocation_date = Column(Date, nullable=True)
    claims = Column(JSON, nullable=False, default=list)
    data = Column(Text, nullable=False)

    def get_status(self, today: date | None = None) -> TokenStatus:
        today = today or date.today()
        if self.revocation_date is not None:
            return TokenStatus.REVOKED
        if self.expiry_date is not None and self.expiry_date < today:
            return TokenStatus.EXPIRED
        if self.valid_from_date is not None and self.valid_from_date > today:
            return TokenStatus.PENDING
        return TokenStatus.ACTIVE

    @property
    def status(self) -> TokenStatus:
        return self.get_status()

    def __repr__(self):
        return f"<Token(token_id='{self.token_id}', name='{self.name}')>"
