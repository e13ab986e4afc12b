"""
Pydantic models for User entities and password operations.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from warden.models.security import PasswordChangeReason, UserSortBy, UserStatus
from .common import PageInfo


class UserModel(BaseModel):
    """
    A user as returned to callers. The password hash is never exposed.
    """

    model_config = ConfigDict(from_attributes=True)

    user_directory_id: UUID
    username: str
    name: str = ""
    preferred_name: str = ""
    email: str = ""
    phone_number: str = ""
    mobile_number: str = ""
    status: UserStatus = UserStatus.ACTIVE
    password_attempts: int = 0
    password_expiry: datetime | None = None


class UserRequest(BaseModel):
    """
    Create or update payload for a user.

    On update only the fields that are set are applied.
    """

    user_directory_id: UUID | None = None
    username: str = Field(min_length=1, max_length=100)
    name: str | None = Field(default=None, max_length=100)
    preferred_name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=100)
    phone_number: str | None = Field(default=None, max_length=100)
    mobile_number: str | None = Field(default=None, max_length=100)
    password: str | None = None
    password_attempts: int | None = None
    password_expiry: datetime | None = None
    status: UserStatus | None = None


class Users(PageInfo):
    user_directory_id: UUID
    sort_by: UserSortBy | None = None
    users: list[UserModel]


class PasswordChange(BaseModel):
    """Body of ``PUT /users/{username}/password``.

    Without ``user_directory_id`` the user changes their own password and must
    supply ``password``. With it an administrator changes the password.
    """

    new_password: str = Field(min_length=1)
    password: str | None = None
    user_directory_id: UUID | None = None
    expire_password: bool = False
    lock_user: bool = False
    reset_password_history: bool = False
    reason: PasswordChangeReason = PasswordChangeReason.USER


class PasswordResetInitiation(BaseModel):
    reset_password_url: str
    send_email: bool = True


class PasswordResetCompletion(BaseModel):
    new_password: str = Field(min_length=1)
    security_code: str = Field(min_length=1)
