"""
Pydantic models for roles and functions.
"""

from pydantic import BaseModel, ConfigDict, Field


class FunctionModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=100)


class RoleModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(default="", max_length=100)


class RoleFunctionRequest(BaseModel):
    function_code: str = Field(min_length=1)
