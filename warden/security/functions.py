"""
Function codes guarding the security API.
"""

TENANT_ADMINISTRATION = "Security.TenantAdministration"
USER_DIRECTORY_ADMINISTRATION = "Security.UserDirectoryAdministration"
USER_ADMINISTRATION = "Security.UserAdministration"
GROUP_ADMINISTRATION = "Security.GroupAdministration"
USER_GROUPS = "Security.UserGroups"
RESET_USER_PASSWORD = "Security.ResetUserPassword"
TOKEN_ADMINISTRATION = "Security.TokenAdministration"
POLICY_ADMINISTRATION = "Security.PolicyAdministration"

SECURITY_FUNCTIONS: list[tuple[str, str, str]] = [
    (TENANT_ADMINISTRATION, "Tenant Administration", "Tenant Administration"),
    (
        USER_DIRECTORY_ADMINISTRATION,
        "User Directory Administration",
        "User Directory Administration",
    ),
    (USER_ADMINISTRATION, "User Administration", "User Administration"),
    (GROUP_ADMINISTRATION, "Group Administration", "Group Administration"),
    (USER_GROUPS, "User Group Administration", "User Group Administration"),
    (RESET_USER_PASSWORD, "Reset User Password", "Reset User Password"),
    (TOKEN_ADMINISTRATION, "Token Administration", "Token Administration"),
    (POLICY_ADMINISTRATION, "Policy Administration", "Policy Administration"),
]
