"""
Exception catalog for the security service.

Every exception carries the HTTP status it maps to and the slug of its
problem type. The API renders them as ``application/problem+json`` documents
with ``type`` set to ``PROBLEM_TYPE_BASE_URI + slug``.
"""

from fastapi import status

PROBLEM_TYPE_BASE_URI = "http://inception.digital/problems/security/"


class SecurityServiceError(Exception):
    """Base class for every error raised by the security service."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    slug: str = "service-unavailable"
    title: str = "Service Unavailable"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def problem_type(self) -> str:
        return PROBLEM_TYPE_BASE_URI + self.slug


# ── 400 ──────────────────────────────────────────────────────────────


class InvalidArgumentError(SecurityServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    slug = "invalid-argument"
    title = "Invalid Argument"

    def __init__(self, parameter: str):
        super().__init__(f"Invalid argument ({parameter})")
        self.parameter = parameter


class InvalidSecurityCodeError(SecurityServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    slug = "invalid-security-code"
    title = "Invalid Security Code"

    def __init__(self, username: str):
        super().__init__(
            f"The security code provided for the user ({username}) is invalid"
        )


class InvalidPolicyDataError(SecurityServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    slug = "invalid-policy-data"
    title = "Invalid Policy Data"

    def __init__(self, reason: str | None = None):
        message = "The policy data is invalid"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PolicyDataMismatchError(SecurityServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    slug = "policy-data-mismatch"
    title = "Policy Data Mismatch"

    def __init__(self, attribute: str, expected: str, actual: str | None):
        super().__init__(
            f"The policy {attribute} ({expected}) does not match the {attribute} "
            f"in the policy data ({actual})"
        )


# ── 401 ──────────────────────────────────────────────────────────────


class AuthenticationFailedError(SecurityServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    slug = "authentication-failed"
    title = "Authentication Failed"

    def __init__(self, username: str):
        super().__init__(f"Failed to authenticate the user ({username})")


class UnauthorizedError(SecurityServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    slug = "unauthorized"
    title = "Unauthorized"

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class UsernameNotFoundError(SecurityServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    slug = "username-not-found"
    title = "Username Not Found"

    def __init__(self, username: str):
        super().__init__(f"The user ({username}) could not be found")


# ── 403 ──────────────────────────────────────────────────────────────


class UserLockedError(SecurityServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    slug = "user-locked"
    title = "User Locked"

    def __init__(self, username: str):
        super().__init__(f"The user ({username}) is locked")


class ExpiredPasswordError(SecurityServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    slug = "expired-password"
    title = "Expired Password"

    def __init__(self, username: str):
        super().__init__(f"The password for the user ({username}) has expired")


class AccessDeniedError(SecurityServiceError):
    status_code = status.HTTP_403_FORBIDDEN
    slug = "access-denied"
    title = "Access Denied"

    def __init__(self, message: str = "Access is denied"):
        super().__init__(message)


# ── 404 ──────────────────────────────────────────────────────────────


class UserNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "user-not-found"
    title = "User Not Found"

    def __init__(self, username: str):
        super().__init__(f"The user ({username}) could not be found")


class GroupNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "group-not-found"
    title = "Group Not Found"

    def __init__(self, group_name: str):
        super().__init__(f"The group ({group_name}) could not be found")


class GroupMemberNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "group-member-not-found"
    title = "Group Member Not Found"

    def __init__(self, group_name: str, member_name: str):
        super().__init__(
            f"The group member ({member_name}) could not be found for the group ({group_name})"
        )


class GroupRoleNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "group-role-not-found"
    title = "Group Role Not Found"

    def __init__(self, group_name: str, role_code: str):
        super().__init__(
            f"The role ({role_code}) could not be found for the group ({group_name})"
        )


class RoleNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "role-not-found"
    title = "Role Not Found"

    def __init__(self, role_code: str):
        super().__init__(f"The role ({role_code}) could not be found")


class FunctionNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "function-not-found"
    title = "Function Not Found"

    def __init__(self, function_code: str):
        super().__init__(f"The function ({function_code}) could not be found")


class TenantNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "tenant-not-found"
    title = "Tenant Not Found"

    def __init__(self, tenant_id):
        super().__init__(f"The tenant ({tenant_id}) could not be found")


class TenantUserDirectoryNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "tenant-user-directory-not-found"
    title = "Tenant User Directory Not Found"

    def __init__(self, tenant_id, user_directory_id):
        super().__init__(
            f"The tenant user directory ({user_directory_id}) could not be found "
            f"for the tenant ({tenant_id})"
        )


class UserDirectoryNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "user-directory-not-found"
    title = "User Directory Not Found"

    def __init__(self, user_directory_id):
        super().__init__(f"The user directory ({user_directory_id}) could not be found")


class UserDirectoryTypeNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "user-directory-type-not-found"
    title = "User Directory Type Not Found"

    def __init__(self, user_directory_type: str):
        super().__init__(
            f"The user directory type ({user_directory_type}) could not be found"
        )


class TokenNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "token-not-found"
    title = "Token Not Found"

    def __init__(self, token_id: str):
        super().__init__(f"The token ({token_id}) could not be found")


class PolicyNotFoundError(SecurityServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    slug = "policy-not-found"
    title = "Policy Not Found"

    def __init__(self, policy_id: str):
        super().__init__(f"The policy ({policy_id}) could not be found")


# ── 409 ──────────────────────────────────────────────────────────────


class DuplicateUserError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "duplicate-user"
    title = "Duplicate User"

    def __init__(self, username: str):
        super().__init__(f"The user ({username}) already exists")


class DuplicateGroupError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "duplicate-group"
    title = "Duplicate Group"

    def __init__(self, group_name: str):
        super().__init__(f"The group ({group_name}) already exists")


class DuplicateRoleError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "duplicate-role"
    title = "Duplicate Role"

    def __init__(self, role_code: str):
        super().__init__(f"The role ({role_code}) already exists")


class DuplicateFunctionError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "duplicate-function"
    title = "Duplicate Function"

    def __init__(self, function_code: str):
        super().__init__(f"The function ({function_code}) already exists")


class DuplicateTenantError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "duplicate-tenant"
    title = "Duplicate Tenant"

    def __init__(self, tenant: str):
        super().__init__(f"The tenant ({tenant}) already exists")


class DuplicateUserDirectoryError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "duplicate-user-directory"
    title = "Duplicate User Directory"

    def __init__(self, user_directory: str):
        super().__init__(f"The user directory ({user_directory}) already exists")


class DuplicatePolicyError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "duplicate-policy"
    title = "Duplicate Policy"

    def __init__(self, policy_id: str):
        super().__init__(f"The policy ({policy_id}) already exists")


class ExistingGroupMembersError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "existing-group-members"
    title = "Existing Group Members"

    def __init__(self, group_name: str):
        super().__init__(f"The group ({group_name}) has existing members")


class ExistingGroupsError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "existing-groups"
    title = "Existing Groups"

    def __init__(self, user_directory_id):
        super().__init__(f"The user directory ({user_directory_id}) has existing groups")


class ExistingUsersError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "existing-users"
    title = "Existing Users"

    def __init__(self, user_directory_id):
        super().__init__(f"The user directory ({user_directory_id}) has existing users")


class ExistingPasswordError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "existing-password"
    title = "Existing Password"

    def __init__(self, username: str):
        super().__init__(
            f"The new password for the user ({username}) has been used recently and is not valid"
        )


class ExistingGroupMemberError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "existing-group-member"
    title = "Existing Group Member"

    def __init__(self, group_name: str, member_name: str):
        super().__init__(
            f"The group member ({member_name}) already exists for the group ({group_name})"
        )


class ExistingGroupRoleError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "existing-group-role"
    title = "Existing Group Role"

    def __init__(self, group_name: str, role_code: str):
        super().__init__(
            f"The role ({role_code}) is already assigned to the group ({group_name})"
        )


class ExistingTenantUserDirectoryError(SecurityServiceError):
    status_code = status.HTTP_409_CONFLICT
    slug = "existing-tenant-user-directory"
    title = "Existing Tenant User Directory"

    def __init__(self, tenant_id, user_directory_id):
        super().__init__(
            f"The user directory ({user_directory_id}) is already associated with "
            f"the tenant ({tenant_id})"
        )


# ── 500 ──────────────────────────────────────────────────────────────


class ServiceUnavailableError(SecurityServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    slug = "service-unavailable"
    title = "Service Unavailable"
