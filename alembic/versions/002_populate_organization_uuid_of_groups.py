"""Assign legacy groups to the default organization.

Revision ID: 002
Revises: 001
Create Date: 2026-10-05

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

DEFAULT_ORGANIZATION_PROPERTY = "organization.default"


def upgrade() -> None:
    conn = op.get_bind()
    organization_uuid = conn.execute(
        sa.text("SELECT text_value FROM internal_properties WHERE kee = :kee"),
        {"kee": DEFAULT_ORGANIZATION_PROPERTY},
    ).scalar()
    if organization_uuid is None:
        orphans = conn.execute(
            sa.text("SELECT count(*) FROM groups WHERE organization_uuid IS NULL")
        ).scalar()
        if orphans:
            raise RuntimeError(
                f"{orphans} groups have no organization and no default organization is defined"
            )
    else:
        conn.execute(
            sa.text(
                "UPDATE groups SET organization_uuid = :org, updated_at = now() "
                "WHERE organization_uuid IS NULL"
            ),
            {"org": organization_uuid},
        )

    op.alter_column("groups", "organization_uuid", existing_type=sa.String(40), nullable=False)
    op.create_index("ux_groups_org_name", "groups", ["organization_uuid", "name"], unique=True)


def downgrade() -> None:
    op.drop_index("ux_groups_org_name", table_name="groups")
    op.alter_column("groups", "organization_uuid", existing_type=sa.String(40), nullable=True)
