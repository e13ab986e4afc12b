"""
Group model.

Groups belong to a single user directory. Users are members through
``security_user_to_group_map``; roles are granted through
``security_role_to_group_map``.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from warden.db.base import Base
from .relationships import role_group_association, user_group_association
import uuid


class Group(Base):
    __tablename__ = "security_groups"

    group_id = Column(Uuid, primary_key=True, nullable=False, default=uuid.uuid4)
    user_directory_id = Column(
        Uuid,
        ForeignKey("security_user_directories.user_directory_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(100), nullable=False, index=True)
    description = Column(String(100), nullable=False, default="")

    created = Column(DateTime(timezone=True), server_default=func.now())
    updated = Column(DateTime(timezone=True), onupdate=func.now())

    users = relationship(
        "User",
        secondary=user_group_association,
        back_populates="groups",
        passive_deletes=True,
    )
    roles = relationship(
        "Role",
        secondary=role_group_association,
        back_populates="groups",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "user_directory_id",
            "name",
            name="uq_security_groups_user_directory_name",
        ),
    )

    def __repr__(self):
        return f"<Group(group_id={self.group_id}, name='{self.name}')>"
