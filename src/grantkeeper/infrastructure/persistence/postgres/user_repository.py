"""PostgreSQL user repository implementation."""

from datetime import UTC, datetime

from psycopg import AsyncConnection

from grantkeeper.domain.entities import User

_COLUMNS = "id, login, name, email, active, is_root"


def _to_user(r: tuple) -> User:
    return User(id=r[0], login=r[1], name=r[2], email=r[3], active=r[4], root=r[5])


class PostgresUserRepository:
    """User repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_login(self, login: str) -> User | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM users WHERE login = %s",
            (login,),
        )
        r = await cur.fetchone()
        return _to_user(r) if r else None

    async def set_root(self, login: str, root: bool) -> bool:
        """Set the root flag of login. False when nothing changed."""
        cur = await self._conn.execute(
            "UPDATE users SET is_root = %s, updated_at = %s "
            "WHERE login = %s AND is_root IS DISTINCT FROM %s",
            (root, datetime.now(UTC), login, root),
        )
        return cur.rowcount > 0
