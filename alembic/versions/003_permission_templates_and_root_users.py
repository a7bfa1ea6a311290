"""Permission templates and root users.

Revision ID: 003
Revises: 002
Create Date: 2026-10-19

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column(
        "users",
        sa.Column("is_root", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "permission_templates",
        sa.Column("uuid", sa.String(40), primary_key=True),
        sa.Column("organization_uuid", sa.String(40), sa.ForeignKey("organizations.uuid"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(4000), nullable=True),
        sa.Column("key_pattern", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.execute(
        "CREATE UNIQUE INDEX ux_permission_templates_org_name "
        "ON permission_templates (organization_uuid, lower(name))"
    )

    op.create_table(
        "permission_template_grants",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column(
            "template_uuid",
            sa.String(40),
            sa.ForeignKey("permission_templates.uuid", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("holder_kind", sa.String(10), nullable=False),
        sa.Column("user_id", sa.BigInteger(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("group_id", sa.BigInteger(), sa.ForeignKey("groups.id", ondelete="CASCADE"), nullable=True),
        sa.Column("permission", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "(holder_kind = 'user' AND user_id IS NOT NULL AND group_id IS NULL)"
            " OR (holder_kind = 'group' AND group_id IS NOT NULL AND user_id IS NULL)"
            " OR (holder_kind = 'anyone' AND user_id IS NULL AND group_id IS NULL)",
            name="ck_permission_template_grants_holder_kind",
        ),
    )
    op.execute(
        "CREATE UNIQUE INDEX ux_permission_template_grants ON permission_template_grants ("
        "template_uuid, holder_kind, COALESCE(user_id, 0), COALESCE(group_id, 0), permission)"
    )
    op.create_index(
        "ix_permission_template_grants_group_id", "permission_template_grants", ["group_id"]
    )


def downgrade() -> None:
    op.drop_table("permission_template_grants")
    op.drop_table("permission_templates")
    op.drop_column("users", "is_root")
