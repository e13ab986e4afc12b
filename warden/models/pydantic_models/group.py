"""
Pydantic models for groups, group members and group roles.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from warden.models.security import GroupMemberType
from .common import PageInfo


class GroupModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_directory_id: UUID | None = None
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=100)


class Groups(PageInfo):
    user_directory_id: UUID
    groups: list[GroupModel]


class GroupMember(BaseModel):
    user_directory_id: UUID
    group_name: str
    member_type: GroupMemberType = GroupMemberType.USER
    member_name: str


class GroupMembers(PageInfo):
    user_directory_id: UUID
    group_name: str
    group_members: list[GroupMember]


class GroupMemberRequest(BaseModel):
    member_type: GroupMemberType = GroupMemberType.USER
    member_name: str = Field(min_length=1)


class GroupRole(BaseModel):
    user_directory_id: UUID
    group_name: str
    role_code: str


class GroupRoleRequest(BaseModel):
    role_code: str = Field(min_length=1)
