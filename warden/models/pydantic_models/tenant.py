"""
Pydantic models for Tenant entities.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from warden.models.security import TenantStatus
from .common import PageInfo


class TenantModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tenant_id: UUID | None = None
    name: str = Field(min_length=1, max_length=100)
    status: TenantStatus = TenantStatus.ACTIVE


class Tenants(PageInfo):
    tenants: list[TenantModel]
