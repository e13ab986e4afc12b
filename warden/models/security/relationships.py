"""
Association tables for the many-to-many relationships in the security model.

Rows are removed by the database (ON DELETE CASCADE) when either side goes
away, so the ORM relationships use ``passive_deletes``.
"""

from sqlalchemy import Column, ForeignKey, String, Table, Uuid
from warden.db.base import Base


tenant_user_directory_association = Table(
    "security_tenant_to_user_directory_map",
    Base.metadata,
    Column(
        "tenant_id",
        Uuid,
        ForeignKey("security_tenants.tenant_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_directory_id",
        Uuid,
        ForeignKey("security_user_directories.user_directory_id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)

user_group_association = Table(
    "security_user_to_group_map",
    Base.metadata,
    Column(
        "user_id",
        Uuid,
        ForeignKey("security_users.user_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "group_id",
        Uuid,
        ForeignKey("security_groups.group_id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)

role_group_association = Table(
    "security_role_to_group_map",
    Base.metadata,
    Column(
        "role_code",
        String(100),
        ForeignKey("security_roles.code", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "group_id",
        Uuid,
        ForeignKey("security_groups.group_id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)

function_role_association = Table(
    "security_function_to_role_map",
    Base.metadata,
    Column(
        "function_code",
        String(100),
        ForeignKey("security_functions.code", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_code",
        String(100),
        ForeignKey("security_roles.code", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)
