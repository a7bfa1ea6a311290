"""Health check endpoints."""

import falcon.asgi
import psycopg
from psycopg_pool import AsyncConnectionPool

from grantkeeper.logging import get_logger

log = get_logger(__name__)


class HealthResource:
    """Liveness and readiness endpoints."""

    def __init__(self, pool: AsyncConnectionPool | None = None) -> None:
        self._pool = pool

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /api/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /api/health/ready - database reachable."""
        if self._pool is not None:
            try:
                await self._pool.check()
            except psycopg.Error as e:
                log.warning("readiness_check_failed", error=str(e))
                resp.media = {"status": "unavailable"}
                resp.status = falcon.HTTP_503
                return
        resp.media = {"status": "ready"}
        resp.status = falcon.HTTP_200
