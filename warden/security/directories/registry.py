"""
Registry of user directory types.

Each type maps a stable code (stored in ``security_user_directories.type``)
to a display name and the provider class that implements it.
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from warden.exceptions import UserDirectoryTypeNotFoundError
from warden.models.pydantic_models import UserDirectoryParameter
from warden.models.security import UserDirectory
from .base import UserDirectoryProvider
from .internal import InternalUserDirectory

INTERNAL_USER_DIRECTORY_TYPE = "InternalUserDirectory"


@dataclass(frozen=True)
class UserDirectoryType:
    code: str
    name: str
    provider_class: type


_user_directory_types: dict[str, UserDirectoryType] = {}


def register_user_directory_type(code: str, name: str, provider_class: type) -> None:
    _user_directory_types[code] = UserDirectoryType(code, name, provider_class)


def get_user_directory_types() -> list[UserDirectoryType]:
    return sorted(_user_directory_types.values(), key=lambda t: t.name)


def get_user_directory_type(code: str) -> UserDirectoryType:
    try:
        return _user_directory_types[code]
    except KeyError:
        raise UserDirectoryTypeNotFoundError(code) from None


def create_provider(user_directory: UserDirectory, db: AsyncSession) -> UserDirectoryProvider:
    directory_type = get_user_directory_type(user_directory.type)
    parameters = [
        UserDirectoryParameter.model_validate(parameter)
        for parameter in (user_directory.parameters or [])
    ]
    return directory_type.provider_class(user_directory.user_directory_id, parameters, db)


register_user_directory_type(
    INTERNAL_USER_DIRECTORY_TYPE, "Internal User Directory", InternalUserDirectory
)
