from .groups import GroupRepository
from .password_resets import PasswordResetRepository
from .policies import PolicyRepository
from .roles import FunctionRepository, RoleRepository
from .tenants import TenantRepository
from .tokens import TokenRepository
from .user_directories import UserDirectoryRepository
from .users import UserRepository

__all__ = [
    "FunctionRepository",
    "GroupRepository",
    "PasswordResetRepository",
    "PolicyRepository",
    "RoleRepository",
    "TenantRepository",
    "TokenRepository",
    "UserDirectoryRepository",
    "UserRepository",
]
