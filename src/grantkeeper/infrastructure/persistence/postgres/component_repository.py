"""PostgreSQL component repository implementation."""

from psycopg import AsyncConnection

from grantkeeper.domain.entities import Component
from grantkeeper.domain.value_objects import Qualifier
from grantkeeper.infrastructure.persistence.postgres.like import contains_pattern

_COLUMNS = "c.uuid, c.kee, c.name, c.qualifier, c.project_uuid, c.organization_uuid"

# Projects (not views) on which the user holds the permission directly or through a group.
_PROJECTS_WITH_PERMISSION = (
    "FROM components c WHERE c.enabled AND c.qualifier = %(qualifier)s "
    "AND c.project_uuid = c.uuid "
    "AND EXISTS (SELECT 1 FROM grants g WHERE g.project_uuid = c.uuid "
    "AND g.permission = %(permission)s AND ("
    "(g.holder_kind = 'user' AND g.user_id = %(user_id)s) "
    "OR (g.holder_kind = 'group' AND g.group_id IN "
    "(SELECT group_id FROM groups_users WHERE user_id = %(user_id)s))))"
)


def _to_component(r: tuple) -> Component:
    return Component(
        uuid=r[0],
        key=r[1],
        name=r[2],
        qualifier=r[3],
        project_uuid=r[4],
        organization_uuid=r[5],
    )


def _project_query_filter(query: str | None) -> tuple[str, dict]:
    """Name substring (case-insensitive) or exact key."""
    if not query:
        return "", {}
    return (
        " AND (lower(c.name) LIKE %(name)s ESCAPE '/' OR c.kee = %(key)s)",
        {"name": contains_pattern(query), "key": query},
    )


class PostgresComponentRepository:
    """Component repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_uuid(self, uuid: str) -> Component | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM components c WHERE c.uuid = %s AND c.enabled",
            (uuid,),
        )
        r = await cur.fetchone()
        return _to_component(r) if r else None

    async def get_by_key(self, key: str) -> Component | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM components c WHERE c.kee = %s AND c.enabled",
            (key,),
        )
        r = await cur.fetchone()
        return _to_component(r) if r else None

    async def search_projects_with_permission(
        self,
        user_id: int,
        permission: str,
        *,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Component]:
        """Projects ordered by name. Global and Anyone grants are not considered."""
        where, params = _project_query_filter(query)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} {_PROJECTS_WITH_PERMISSION}{where} "
            "ORDER BY lower(c.name), c.uuid OFFSET %(offset)s LIMIT %(limit)s",
            {
                "qualifier": Qualifier.PROJECT.value,
                "permission": permission,
                "user_id": user_id,
                "offset": offset,
                "limit": limit,
                **params,
            },
        )
        rows = await cur.fetchall()
        return [_to_component(r) for r in rows]

    async def count_projects_with_permission(
        self, user_id: int, permission: str, *, query: str | None = None
    ) -> int:
        where, params = _project_query_filter(query)
        cur = await self._conn.execute(
            f"SELECT count(*) {_PROJECTS_WITH_PERMISSION}{where}",
            {
                "qualifier": Qualifier.PROJECT.value,
                "permission": permission,
                "user_id": user_id,
                **params,
            },
        )
        r = await cur.fetchone()
        return r[0]
