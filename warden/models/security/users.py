"""
User model and its password history.

Usernames are unique per user directory, compared case-insensitively by the
repositories. ``password`` holds the bcrypt hash, never the plain text.
"""

from datetime import datetime

from sqlalchemy import (
    Column,
    String,
    Integer,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from warden.db.base import Base
from warden.utils import as_utc, utc_now
from .converters import CodeEnum
from .enums import UserStatus
from .relationships import user_group_association
import uuid


class User(Base):
    __tablename__ = "security_users"

    user_id = Column(Uuid, primary_key=True, nullable=False, default=uuid.uuid4)
    user_directory_id = Column(
        Uuid,
        ForeignKey("security_user_directories.user_directory_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    username = Column(String(100), nullable=False, index=True)
    name = Column(String(100), nullable=False, default="")
    preferred_name = Column(String(100), nullable=False, default="")
    email = Column(String(100), nullable=False, default="")
    phone_number = Column(String(100), nullable=False, default="")
    mobile_number = Column(String(100), nullable=False, default="")
    password = Column(String(100), nullable=False)
    password_attempts = Column(Integer, nullable=False, default=0)
    password_expiry = Column(DateTime(timezone=True), nullable=True)
    status = Column(CodeEnum(UserStatus), nullable=False, default=UserStatus.ACTIVE)

    created = Column(DateTime(timezone=True), server_default=func.now())
    updated = Column(DateTime(timezone=True), onupdate=func.now())

    groups = relationship(
        "Group",
        secondary=user_group_association,
        back_populates="users",
        passive_deletes=True,
    )
    password_history = relationship(
        "UserPasswordHistory",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "user_directory_id",
            "username",
            name="uq_security_users_user_directory_username",
        ),
    )

    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def is_locked(self, max_password_attempts: int) -> bool:
        return (
            max_password_attempts > 0
            and (self.password_attempts or 0) >= max_password_attempts
        )

    def has_password_expired(self, now: datetime | None = None) -> bool:
        if self.password_expiry is None:
            return False
        return as_utc(self.password_expiry) <= (now or utc_now())

    def __repr__(self):
        return f"<User(user_id={self.user_id}, username='{self.username}')>"


class UserPasswordHistory(Base):
    __tablename__ = "security_users_password_history"

    password_history_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Uuid,
        ForeignKey("security_users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    changed = Column(DateTime(timezone=True), nullable=False)
    password = Column(String(100), nullable=False)

    user = relationship("User", back_populates="password_history")
