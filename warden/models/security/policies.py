"""
Policy model. ``data`` holds the XACML policy or policy set document.
"""

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.sql import func
from warden.db.base import Base
from .converters import CodeEnum
from .enums import PolicyType


class Policy(Base):
    __tablename__ = "security_policies"

    policy_id = Column(String(100), primary_key=True, nullable=False)
    version = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False, index=True)
    type = Column(CodeEnum(PolicyType), nullable=False)
    data = Column(Text, nullable=False)

    created = Column(DateTime(timezone=True), server_default=func.now())
    updated = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Policy(policy_id='{self.policy_id}', version='{self.version}')>"
