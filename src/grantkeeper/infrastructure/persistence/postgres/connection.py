"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

APPLICATION_NAME = "grantkeeper"


def create_pool(
    database_url: str,
    min_size: int = 2,
    max_size: int = 10,
    acquire_timeout: float = 30.0,
) -> AsyncConnectionPool:
    """Connection pool for the grant store, not yet opened.

    PoolLifespanMiddleware opens it on ASGI startup. Connections are checked
    before being handed out.
    """
    return AsyncConnectionPool(
        conninfo=database_url,
        min_size=min_size,
        max_size=max_size,
        timeout=acquire_timeout,
        kwargs={"application_name": APPLICATION_NAME},
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
