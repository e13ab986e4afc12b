"""
Pydantic models for UserDirectory entities and directory types.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .common import PageInfo


class UserDirectoryParameter(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    value: str


class UserDirectoryModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_directory_id: UUID | None = None
    type: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=100)
    parameters: list[UserDirectoryParameter] = Field(default_factory=list)

    def get_parameter(self, name: str) -> str | None:
        for parameter in self.parameters:
            if parameter.name.lower() == name.lower():
                return parameter.value
        return None


class UserDirectorySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_directory_id: UUID
    type: str
    name: str


class UserDirectorySummaries(PageInfo):
    user_directory_summaries: list[UserDirectorySummary]


class UserDirectoryTypeModel(BaseModel):
    code: str
    name: str


class UserDirectoryCapabilitiesModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    supports_admin_change_password: bool
    supports_change_password: bool
    supports_group_administration: bool
    supports_group_member_administration: bool
    supports_password_expiry: bool
    supports_password_history: bool
    supports_user_administration: bool
    supports_user_locks: bool
