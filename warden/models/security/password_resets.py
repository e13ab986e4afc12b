"""
PasswordReset model.

Only the SHA-256 hash of the security code is stored. A username may have
several outstanding requests; completing one expires the rest.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from warden.db.base import Base
from .converters import CodeEnum
from .enums import PasswordResetStatus


class PasswordReset(Base):
    __tablename__ = "security_password_resets"

    username = Column(String(100), primary_key=True, nullable=False)
    security_code_hash = Column(String(100), primary_key=True, nullable=False)
    status = Column(
        CodeEnum(PasswordResetStatus),
        nullable=False,
        default=PasswordResetStatus.REQUESTED,
    )
    requested = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    completed = Column(DateTime(timezone=True), nullable=True)
    expired = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<PasswordReset(username='{self.username}', status={self.status})>"
