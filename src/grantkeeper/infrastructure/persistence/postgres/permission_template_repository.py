"""PostgreSQL permission template repository implementation.

Template grants reuse the holder encoding of the grants table: holder_kind
plus nullable user_id / group_id.
"""

from psycopg import AsyncConnection

from grantkeeper.domain.entities import PermissionTemplate, TemplateGroup
from grantkeeper.domain.value_objects import ANYONE, AnyoneHolder, GroupHolder, Holder
from grantkeeper.infrastructure.persistence.postgres.grant_repository import _holder_filter
from grantkeeper.infrastructure.persistence.postgres.like import contains_pattern

_COLUMNS = "uuid, organization_uuid, name, description, key_pattern, created_at, updated_at"

# Anyone first, then the groups of the template's organization.
_CANDIDATES = (
    "SELECT 0 AS rank, NULL::bigint AS id, %(anyone)s::text AS name, NULL::text AS description "
    "UNION ALL "
    "SELECT 1, g.id, g.name, g.description FROM groups g "
    "WHERE g.organization_uuid = %(organization_uuid)s"
)

_TEMPLATE_GROUPS = (
    f"FROM ({_CANDIDATES}) c "
    "LEFT JOIN permission_template_grants t ON t.template_uuid = %(template_uuid)s AND ("
    "(c.id IS NULL AND t.holder_kind = 'anyone') "
    "OR (t.holder_kind = 'group' AND t.group_id = c.id))"
)


def _to_template(r: tuple) -> PermissionTemplate:
    return PermissionTemplate(
        uuid=r[0],
        organization_uuid=r[1],
        name=r[2],
        description=r[3],
        key_pattern=r[4],
        created_at=r[5],
        updated_at=r[6],
    )


def _template_group_filters(
    permission: str | None, query: str | None
) -> tuple[str, str, dict]:
    """(WHERE, HAVING, params) for template group listing.

    Without query only groups holding a permission in the template are listed.
    """
    where, having, params = "", "", {}
    if query:
        where = " WHERE lower(c.name) LIKE %(query)s ESCAPE '/'"
        params["query"] = contains_pattern(query)
    if permission:
        having = " HAVING bool_or(t.permission = %(permission)s)"
        params["permission"] = permission
    elif not query:
        having = " HAVING count(t.permission) > 0"
    return where, having, params


class PostgresPermissionTemplateRepository:
    """Permission template repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_uuid(self, uuid: str) -> PermissionTemplate | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_templates WHERE uuid = %s",
            (uuid,),
        )
        r = await cur.fetchone()
        return _to_template(r) if r else None

    async def get_by_name(
        self, organization_uuid: str, name: str
    ) -> PermissionTemplate | None:
        """Template of the organization whose name matches, ignoring case."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission_templates "
            "WHERE organization_uuid = %s AND lower(name) = lower(%s)",
            (organization_uuid, name),
        )
        r = await cur.fetchone()
        return _to_template(r) if r else None

    async def insert(self, template: PermissionTemplate) -> None:
        await self._conn.execute(
            f"INSERT INTO permission_templates ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                template.uuid,
                template.organization_uuid,
                template.name,
                template.description,
                template.key_pattern,
                template.created_at,
                template.updated_at,
            ),
        )

    async def delete_grant(self, template_uuid: str, holder: Holder, permission: str) -> None:
        holder_sql, holder_params = _holder_filter(holder)
        await self._conn.execute(
            "DELETE FROM permission_template_grants "
            f"WHERE template_uuid = %s AND {holder_sql} AND permission = %s",
            (template_uuid, *holder_params, permission),
        )

    async def search_groups(
        self,
        template: PermissionTemplate,
        *,
        permission: str | None = None,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[TemplateGroup]:
        """Anyone first, then groups by name. Each row lists all its template permissions."""
        where, having, params = _template_group_filters(permission, query)
        cur = await self._conn.execute(
            "SELECT c.id, c.name, c.description, "
            "coalesce(array_agg(DISTINCT t.permission) "
            "FILTER (WHERE t.permission IS NOT NULL), '{}') "
            f"{_TEMPLATE_GROUPS}{where} "
            f"GROUP BY c.rank, c.id, c.name, c.description{having} "
            "ORDER BY c.rank, lower(c.name), c.id "
            "OFFSET %(offset)s LIMIT %(limit)s",
            {
                "anyone": ANYONE,
                "organization_uuid": template.organization_uuid,
                "template_uuid": template.uuid,
                "offset": offset,
                "limit": limit,
                **params,
            },
        )
        rows = await cur.fetchall()
        return [
            TemplateGroup(
                holder=AnyoneHolder() if r[0] is None else GroupHolder(r[0]),
                name=r[1],
                description=r[2],
                permissions=sorted(r[3]),
            )
            for r in rows
        ]

    async def count_groups(
        self,
        template: PermissionTemplate,
        *,
        permission: str | None = None,
        query: str | None = None,
    ) -> int:
        where, having, params = _template_group_filters(permission, query)
        cur = await self._conn.execute(
            "SELECT count(*) FROM (SELECT c.id "
            f"{_TEMPLATE_GROUPS}{where} "
            f"GROUP BY c.rank, c.id, c.name, c.description{having}) s",
            {
                "anyone": ANYONE,
                "organization_uuid": template.organization_uuid,
                "template_uuid": template.uuid,
                **params,
            },
        )
        r = await cur.fetchone()
        return r[0]
