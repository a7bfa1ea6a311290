"""Pool lifespan middleware - opens the pool on startup, closes it on shutdown."""

from typing import Any

from psycopg_pool import AsyncConnectionPool

from grantkeeper.logging import get_logger

log = get_logger(__name__)


class PoolLifespanMiddleware:
    """Ties the connection pool to the ASGI lifespan."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool

    async def process_startup(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.open(wait=True)
        log.info("database_pool_opened", min_size=self._pool.min_size, max_size=self._pool.max_size)

    async def process_shutdown(self, scope: dict[str, Any], event: dict[str, Any]) -> None:
        await self._pool.close()
        log.info("database_pool_closed")
