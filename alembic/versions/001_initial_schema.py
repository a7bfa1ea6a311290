"""Initial schema - organizations, users, groups, components and grants.

Revision ID: 001
Revises:
Create Date: 2026-09-28

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("uuid", sa.String(40), primary_key=True),
        sa.Column("kee", sa.String(32), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ux_organizations_kee", "organizations", ["kee"], unique=True)

    op.create_table(
        "internal_properties",
        sa.Column("kee", sa.String(20), primary_key=True),
        sa.Column("text_value", sa.String(4000), nullable=True),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("login", sa.String(255), nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("email", sa.String(100), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ux_users_login", "users", ["login"], unique=True)

    # organization_uuid is populated for legacy rows by revision 002.
    op.create_table(
        "groups",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("organization_uuid", sa.String(40), sa.ForeignKey("organizations.uuid"), nullable=True),
        sa.Column("name", sa.String(500), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "groups_users",
        sa.Column("group_id", sa.BigInteger(), sa.ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_index("ix_groups_users_user_id", "groups_users", ["user_id"])

    op.create_table(
        "components",
        sa.Column("uuid", sa.String(50), primary_key=True),
        sa.Column("kee", sa.String(400), nullable=False),
        sa.Column("name", sa.String(2000), nullable=False),
        sa.Column("qualifier", sa.String(10), nullable=False),
        sa.Column("project_uuid", sa.String(50), nullable=False),
        sa.Column("organization_uuid", sa.String(40), sa.ForeignKey("organizations.uuid"), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index("ux_components_kee", "components", ["kee"], unique=True)
    op.create_index("ix_components_project_uuid", "components", ["project_uuid"])

    op.create_table(
        "grants",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("organization_uuid", sa.String(40), sa.ForeignKey("organizations.uuid"), nullable=False),
        sa.Column("holder_kind", sa.String(10), nullable=False),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("group_id", sa.BigInteger(), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=True),
        sa.Column("project_uuid", sa.String(50), sa.ForeignKey("components.uuid", ondelete="CASCADE"), nullable=True),
        sa.Column("permission", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "(holder_kind = 'user' AND user_id IS NOT NULL AND group_id IS NULL)"
            " OR (holder_kind = 'group' AND group_id IS NOT NULL AND user_id IS NULL)"
            " OR (holder_kind = 'anyone' AND user_id IS NULL AND group_id IS NULL)",
            name="ck_grants_holder_kind",
        ),
    )
    op.execute(
        "CREATE UNIQUE INDEX ux_grants ON grants ("
        "organization_uuid, holder_kind, COALESCE(user_id, 0), COALESCE(group_id, 0), "
        "COALESCE(project_uuid, ''), permission)"
    )
    op.create_index("ix_grants_user_id", "grants", ["user_id"])
    op.create_index("ix_grants_group_id", "grants", ["group_id"])
    op.create_index("ix_grants_project_uuid", "grants", ["project_uuid"])


def downgrade() -> None:
    op.drop_table("grants")
    op.drop_table("components")
    op.drop_table("groups_users")
    op.drop_table("groups")
    op.drop_table("users")
    op.drop_table("internal_properties")
    op.drop_table("organizations")
