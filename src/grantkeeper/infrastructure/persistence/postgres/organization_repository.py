"""PostgreSQL organization repository implementation."""

from psycopg import AsyncConnection

from grantkeeper.domain.entities import Organization

DEFAULT_ORGANIZATION_PROPERTY = "organization.default"


class PostgresOrganizationRepository:
    """Organization repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_key(self, key: str) -> Organization | None:
        cur = await self._conn.execute(
            "SELECT uuid, kee, name FROM organizations WHERE kee = %s",
            (key,),
        )
        r = await cur.fetchone()
        return Organization(uuid=r[0], key=r[1], name=r[2]) if r else None

    async def get_by_uuid(self, uuid: str) -> Organization | None:
        cur = await self._conn.execute(
            "SELECT uuid, kee, name FROM organizations WHERE uuid = %s",
            (uuid,),
        )
        r = await cur.fetchone()
        return Organization(uuid=r[0], key=r[1], name=r[2]) if r else None

    async def get_default(self) -> Organization:
        """Organization referenced by the organization.default internal property."""
        cur = await self._conn.execute(
            "SELECT o.uuid, o.kee, o.name FROM organizations o "
            "JOIN internal_properties ip ON ip.text_value = o.uuid "
            "WHERE ip.kee = %s",
            (DEFAULT_ORGANIZATION_PROPERTY,),
        )
        r = await cur.fetchone()
        if not r:
            raise RuntimeError("Default organization is not defined")
        return Organization(uuid=r[0], key=r[1], name=r[2])
