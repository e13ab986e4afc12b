"""
UserDirectory model.

``type`` is the code of a registered user directory type (see
``warden.security.directories.registry``). ``parameters`` is the provider
configuration as a list of ``{"name": ..., "value": ...}`` pairs.
"""

from sqlalchemy import Column, String, DateTime, JSON, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from warden.db.base import Base
from .relationships import tenant_user_directory_association
import uuid


class UserDirectory(Base):
    __tablename__ = "security_user_directories"

    user_directory_id = Column(Uuid, primary_key=True, nullable=False, default=uuid.uuid4)
    type = Column(String(100), nullable=False)
    name = Column(String(100), unique=True, nullable=False)
    parameters = Column(JSON, nullable=False, default=list)

    created = Column(DateTime(timezone=True), server_default=func.now())
    updated = Column(DateTime(timezone=True), onupdate=func.now())

    tenants = relationship(
        "Tenant",
        secondary=tenant_user_directory_association,
        back_populates="user_directories",
        passive_deletes=True,
    )

    def get_parameter(self, name: str) -> str | None:
        for parameter in self.parameters or []:
            if parameter.get("name", "").lower() == name.lower():
                return parameter.get("value")
        return None

    def __repr__(self):
        return (
            f"<UserDirectory(user_directory_id={self.user_directory_id}, "
            f"type='{self.type}', name='{self.name}')>"
        )
