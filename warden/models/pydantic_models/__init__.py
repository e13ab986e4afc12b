from .common import PageInfo
from .group import (
    GroupMember,
    GroupMemberRequest,
    GroupMembers,
    GroupModel,
    GroupRole,
    GroupRoleRequest,
    Groups,
)
from .policy import PolicyModel, PolicySummaries, PolicySummary
from .role import FunctionModel, RoleFunctionRequest, RoleModel
from .tenant import TenantModel, Tenants
from .token import (
    GenerateTokenRequest,
    TokenClaim,
    TokenModel,
    TokenSummaries,
    TokenSummary,
)
from .user import (
    PasswordChange,
    PasswordResetCompletion,
    PasswordResetInitiation,
    UserModel,
    UserRequest,
    Users,
)
from .user_directory import (
    UserDirectoryCapabilitiesModel,
    UserDirectoryModel,
    UserDirectoryParameter,
    UserDirectorySummaries,
    UserDirectorySummary,
    UserDirectoryTypeModel,
)

__all__ = [
    "PageInfo",
    "GroupMember",
    "GroupMemberRequest",
    "GroupMembers",
    "GroupModel",
    "GroupRole",
    "GroupRoleRequest",
    "Groups",
    "PolicyModel",
    "PolicySummaries",
    "PolicySummary",
    "FunctionModel",
    "RoleFunctionRequest",
    "RoleModel",
    "TenantModel",
    "Tenants",
    "GenerateTokenRequest",
    "TokenClaim",
    "TokenModel",
    "TokenSummaries",
    "TokenSummary",
    "PasswordChange",
    "PasswordResetCompletion",
    "PasswordResetInitiation",
    "UserModel",
    "UserRequest",
    "Users",
    "UserDirectoryCapabilitiesModel",
    "UserDirectoryModel",
    "UserDirectoryParameter",
    "UserDirectorySummaries",
    "UserDirectorySummary",
    "UserDirectoryTypeModel",
]
