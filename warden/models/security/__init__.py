"""
Security entities: tenants, user directories, users, groups, roles,
functions, tokens, policies and password resets.
"""

from .enums import (
    CodedEnum,
    GroupMemberType,
    PasswordChangeReason,
    PasswordResetStatus,
    PolicySortBy,
    PolicyType,
    SortDirection,
    TenantStatus,
    TokenSortBy,
    TokenStatus,
    TokenType,
    UserSortBy,
    UserStatus,
)
from .converters import CodeEnum
from .relationships import (
    function_role_association,
    role_group_association,
    tenant_user_directory_association,
    user_group_association,
)
from .tenants import Tenant
from .user_directories import UserDirectory
from .users import User, UserPasswordHistory
from .groups import Group
from .roles import Role
from .functions import Function
from .tokens import Token
from .policies import Policy
from .password_resets import PasswordReset

__all__ = [
    "CodedEnum",
    "CodeEnum",
    "GroupMemberType",
    "PasswordChangeReason",
    "PasswordResetStatus",
    "PolicySortBy",
    "PolicyType",
    "SortDirection",
    "TenantStatus",
    "TokenSortBy",
    "TokenStatus",
    "TokenType",
    "UserSortBy",
    "UserStatus",
    "function_role_association",
    "role_group_association",
    "tenant_user_directory_association",
    "user_group_association",
    "Tenant",
    "UserDirectory",
    "User",
    "UserPasswordHistory",
    "Group",
    "Role",
    "Function",
    "Token",
    "Policy",
    "PasswordReset",
]
