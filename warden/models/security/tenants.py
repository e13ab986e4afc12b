"""
Tenant model.

A tenant is the isolation boundary that groups user directories. The link
table is ``security_tenant_to_user_directory_map``.
"""

from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from warden.db.base import Base
from .converters import CodeEnum
from .enums import TenantStatus
from .relationships import tenant_user_directory_association
import uuid


class Tenant(Base):
    __tablename__ = "security_tenants"

    tenant_id = Column(Uuid, primary_key=True, nullable=False, default=uuid.uuid4)
    name = Column(String(100), unique=True, nullable=False)
    status = Column(
        CodeEnum(TenantStatus), nullable=False, default=TenantStatus.ACTIVE
    )

    created = Column(DateTime(timezone=True), server_default=func.now())
    updated = Column(DateTime(timezone=True), onupdate=func.now())

    user_directories = relationship(
        "UserDirectory",
        secondary=tenant_user_directory_association,
        back_populates="tenants",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Tenant(tenant_id={self.tenant_id}, name='{self.name}')>"
