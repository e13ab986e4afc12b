"""initial security schema

Revision ID: 0001_initial_security
Revises:
Create Date: 2026-10-18

Tenants, user directories, users and password history, groups, roles,
functions, the association maps, tokens, policies and password resets.
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial_security"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated", sa.DateTime(timezone=True)),
    ]


def upgrade() -> None:
    # --- tenants ---
    op.create_table(
        "security_tenants",
        sa.Column("tenant_id", sa.Uuid, primary_key=True, nullable=False),
        sa.Column("name", sa.String(100), unique=True, nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        *_timestamps(),
    )

    # --- user directories ---
    op.create_table(
        "security_user_directories",
        sa.Column("user_directory_id", sa.Uuid, primary_key=True, nullable=False),
        sa.Column("type", sa.String(100), nullable=False),
        sa.Column("name", sa.String(100), unique=True, nullable=False),
        sa.Column("parameters", sa.JSON, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "security_tenant_to_user_directory_map",
        sa.Column(
            "tenant_id",
            sa.Uuid,
            sa.ForeignKey("security_tenants.tenant_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_directory_id",
            sa.Uuid,
            sa.ForeignKey("security_user_directories.user_directory_id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )

    # --- users ---
    op.create_table(
        "security_users",
        sa.Column("user_id", sa.Uuid, primary_key=True, nullable=False),
        sa.Column(
            "user_directory_id",
            sa.Uuid,
            sa.ForeignKey("security_user_directories.user_directory_id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("username", sa.String(100), nullable=False, index=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("preferred_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("phone_number", sa.String(100), nullable=False),
        sa.Column("mobile_number", sa.String(100), nullable=False),
        sa.Column("password", sa.String(100), nullable=False),
        sa.Column("password_attempts", sa.Integer, nullable=False),
        sa.Column("password_expiry", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(50), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "user_directory_id",
            "username",
            name="uq_security_users_user_directory_username",
        ),
    )

    op.create_table(
        "security_users_password_history",
        sa.Column("password_history_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Uuid,
            sa.ForeignKey("security_users.user_id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("changed", sa.DateTime(timezone=True), nullable=False),
        sa.Column("password", sa.String(100), nullable=False),
    )

    # --- groups ---
    op.create_table(
        "security_groups",
        sa.Column("group_id", sa.Uuid, primary_key=True, nullable=False),
        sa.Column(
            "user_directory_id",
            sa.Uuid,
            sa.ForeignKey("security_user_directories.user_directory_id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.Column("description", sa.String(100), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "user_directory_id",
            "name",
            name="uq_security_groups_user_directory_name",
        ),
    )

    op.create_table(
        "security_user_to_group_map",
        sa.Column(
            "user_id",
            sa.Uuid,
            sa.ForeignKey("security_users.user_id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "group_id",
            sa.Uuid,
            sa.ForeignKey("security_groups.group_id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )

    # --- roles and functions ---
    op.create_table(
        "security_roles",
        sa.Column("code", sa.String(100), primary_key=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(100), nullable=False),
    )

    op.create_table(
        "security_functions",
        sa.Column("code", sa.String(100), primary_key=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(100), nullable=False),
    )

    op.create_table(
        "security_role_to_group_map",
        sa.Column(
            "role_code",
            sa.String(100),
            sa.ForeignKey("security_roles.code", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "group_id",
            sa.Uuid,
            sa.ForeignKey("security_groups.group_id", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )

    op.create_table(
        "security_function_to_role_map",
        sa.Column(
            "function_code",
            sa.String(100),
            sa.ForeignKey("security_functions.code", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "role_code",
            sa.String(100),
            sa.ForeignKey("security_roles.code", ondelete="CASCADE"),
            primary_key=True,
            index=True,
        ),
    )

    # --- tokens ---
    op.create_table(
        "security_tokens",
        sa.Column("token_id", sa.String(50), primary_key=True, nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.Column("description", sa.String(200), nullable=False),
        sa.Column(
            "issued", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()
        ),
        sa.Column("valid_from_date", sa.Date, nullable=True),
        sa.Column("expiry_date", sa.Date, nullable=True),
        sa.Column("revocation_date", sa.Date, nullable=True),
        sa.Column("claims", sa.JSON, nullable=False),
        sa.Column("data", sa.Text, nullable=False),
    )

    # --- policies ---
    op.create_table(
        "security_policies",
        sa.Column("policy_id", sa.String(100), primary_key=True, nullable=False),
        sa.Column("version", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False, index=True),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("data", sa.Text, nullable=False),
        *_timestamps(),
    )

    # --- password resets ---
    op.create_table(
        "security_password_resets",
        sa.Column("username", sa.String(100), primary_key=True, nullable=False),
        sa.Column("security_code_hash", sa.String(100), primary_key=True, nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column(
            "requested",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("completed", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expired", sa.DateTime(timezone=True), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("security_password_resets")
    op.drop_table("security_policies")
    op.drop_table("security_tokens")
    op.drop_table("security_function_to_role_map")
    op.drop_table("security_role_to_group_map")
    op.drop_table("security_functions")
    op.drop_table("security_roles")
    op.drop_table("security_user_to_group_map")
    op.drop_table("security_groups")
    op.drop_table("security_users_password_history")
    op.drop_table("security_users")
    op.drop_table("security_tenant_to_user_directory_map")
    op.drop_table("security_user_directories")
    op.drop_table("security_tenants")
