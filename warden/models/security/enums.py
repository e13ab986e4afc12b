"""
Enumerations for the security module.

Every enum that is persisted carries a stable ``code``. The code is what
lands in the database column (see ``converters.CodeEnum``) and on the wire,
so member names can change without a data migration.
"""

from enum import Enum


class CodedEnum(str, Enum):
    """Base for enums whose value is their persisted code."""

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, code: str) -> "CodedEnum":
        for member in cls:
            if member.value == code:
                return member
        raise ValueError(f"Failed to determine the {cls.__name__} with the invalid code ({code})")


class UserStatus(CodedEnum):
    """Enumeration of possible user statuses"""

    INACTIVE = "inactive"
    ACTIVE = "active"


class TenantStatus(CodedEnum):
    """Enumeration of possible tenant statuses"""

    INACTIVE = "inactive"
    ACTIVE = "active"


class TokenType(CodedEnum):
    """Enumeration of the token types that can be generated"""

    JWT = "jwt"


class TokenStatus(CodedEnum):
    """Derived from a token's dates; never stored."""

    ACTIVE = "active"
    EXPIRED = "expired"
    REVOKED = "revoked"
    PENDING = "pending"


class PolicyType(CodedEnum):
    """Enumeration of possible policy types"""

    XACML_POLICY = "xacml_policy"
    XACML_POLICY_SET = "xacml_policy_set"


class PasswordResetStatus(CodedEnum):
    """Enumeration of possible password reset statuses"""

    REQUESTED = "requested"
    COMPLETED = "completed"
    EXPIRED = "expired"


class PasswordChangeReason(CodedEnum):
    """Why a password was changed"""

    USER = "user"
    ADMINISTRATIVE = "administrative"
    RESET = "reset"


class GroupMemberType(CodedEnum):
    """Enumeration of possible group member types"""

    USER = "user"
    GROUP = "group"


class SortDirection(CodedEnum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class UserSortBy(CodedEnum):
    NAME = "name"
    PREFERRED_NAME = "preferred_name"
    USERNAME = "username"


class TokenSortBy(CodedEnum):
    NAME = "name"
    TYPE = "type"
    ISSUED = "issued"


class PolicySortBy(CodedEnum):
    NAME = "name"
    TYPE = "type"
