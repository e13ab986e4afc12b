"""
Pydantic models for XACML policies.
"""

from pydantic import BaseModel, ConfigDict, Field

from warden.models.security import PolicySortBy, PolicyType
from .common import PageInfo


class PolicySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    policy_id: str = Field(min_length=1, max_length=100)
    version: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    type: PolicyType


class PolicyModel(PolicySummary):
    data: str = Field(min_length=1)


class PolicySummaries(PageInfo):
    sort_by: PolicySortBy | None = None
    policy_summaries: list[PolicySummary]
