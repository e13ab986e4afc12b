from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from warden.db.base import Base
from .relationships import function_role_association, role_group_association


class Role(Base):
    __tablename__ = "security_roles"

    code = Column(String(100), primary_key=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(String(100), nullable=False, default="")

    functions = relationship(
        "Function",
        secondary=function_role_association,
        back_populates="roles",
        passive_deletes=True,
    )
    groups = relationship(
        "Group",
        secondary=role_group_association,
        back_populates="roles",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Role(code='{self.code}')>"
