from .base import UserDirectoryCapabilities, UserDirectoryProvider
from .internal import InternalUserDirectory
from .registry import (
    INTERNAL_USER_DIRECTORY_TYPE,
    UserDirectoryType,
    create_provider,
    get_user_directory_type,
    get_user_directory_types,
    register_user_directory_type,
)

__all__ = [
    "INTERNAL_USER_DIRECTORY_TYPE",
    "InternalUserDirectory",
    "UserDirectoryCapabilities",
    "UserDirectoryProvider",
    "UserDirectoryType",
    "create_provider",
    "get_user_directory_type",
    "get_user_directory_types",
    "register_user_directory_type",
]
