"""
Router assembly for the security API.

Login and password reset are public; every other route declares its own
function or administrator requirement.
"""

from fastapi import APIRouter

from warden.api.v1.endpoints.security import (
    authentication,
    groups,
    policies,
    roles,
    tenants,
    tokens,
    user_directories,
    users,
)

security_router = APIRouter(prefix="/security")
security_router.include_router(authentication.router)
security_router.include_router(tenants.router)
security_router.include_router(user_directories.router)
security_router.include_router(users.router)
security_router.include_router(groups.router)
security_router.include_router(roles.router)
security_router.include_router(tokens.router)
security_router.include_router(policies.router)
