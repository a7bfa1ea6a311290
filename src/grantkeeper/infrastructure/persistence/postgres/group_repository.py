"""PostgreSQL group repository implementation."""

from psycopg import AsyncConnection

from grantkeeper.domain.entities import Group, GroupWithMembersCount
from grantkeeper.infrastructure.persistence.postgres.like import contains_pattern

_COLUMNS = "g.id, g.organization_uuid, g.name, g.description, g.created_at, g.updated_at"


def _to_group(r: tuple) -> Group:
    return Group(
        id=r[0],
        organization_uuid=r[1],
        name=r[2],
        description=r[3],
        created_at=r[4],
        updated_at=r[5],
    )


def _name_filter(query: str | None) -> tuple[str, tuple]:
    """Case-insensitive substring filter. LIKE wildcards in query match literally."""
    if not query:
        return "", ()
    return " AND lower(g.name) LIKE %s ESCAPE '/'", (contains_pattern(query),)


class PostgresGroupRepository:
    """Group repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, group_id: int) -> Group | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM groups g WHERE g.id = %s",
            (group_id,),
        )
        r = await cur.fetchone()
        return _to_group(r) if r else None

    async def get_by_name(self, organization_uuid: str, name: str) -> Group | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM groups g WHERE g.organization_uuid = %s AND g.name = %s",
            (organization_uuid, name),
        )
        r = await cur.fetchone()
        return _to_group(r) if r else None

    async def is_member(self, group_id: int, user_id: int) -> bool:
        cur = await self._conn.execute(
            "SELECT 1 FROM groups_users WHERE group_id = %s AND user_id = %s",
            (group_id, user_id),
        )
        return await cur.fetchone() is not None

    async def add_member(self, group_id: int, user_id: int) -> None:
        await self._conn.execute(
            "INSERT INTO groups_users (group_id, user_id) VALUES (%s, %s)",
            (group_id, user_id),
        )

    async def search(
        self,
        organization_uuid: str,
        *,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[GroupWithMembersCount]:
        """Groups ordered by name, with member counts."""
        where, params = _name_filter(query)
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS}, count(gu.user_id) FROM groups g "
            "LEFT JOIN groups_users gu ON gu.group_id = g.id "
            f"WHERE g.organization_uuid = %s{where} "
            "GROUP BY g.id ORDER BY lower(g.name), g.id "
            "OFFSET %s LIMIT %s",
            (organization_uuid, *params, offset, limit),
        )
        rows = await cur.fetchall()
        return [GroupWithMembersCount(group=_to_group(r), members_count=r[6]) for r in rows]

    async def count(self, organization_uuid: str, *, query: str | None = None) -> int:
        where, params = _name_filter(query)
        cur = await self._conn.execute(
            f"SELECT count(*) FROM groups g WHERE g.organization_uuid = %s{where}",
            (organization_uuid, *params),
        )
        r = await cur.fetchone()
        return r[0]
