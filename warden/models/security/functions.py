"""
Function model: the leaf permission code granted to roles.
"""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from warden.db.base import Base
from .relationships import function_role_association


class Function(Base):
    __tablename__ = "security_functions"

    code = Column(String(100), primary_key=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(100), nullable=False, default="")

    roles = relationship(
        "Role",
        secondary=function_role_association,
        back_populates="functions",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Function(code='{self.code}')>"
