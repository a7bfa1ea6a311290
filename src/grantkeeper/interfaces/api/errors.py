"""Maps domain exceptions to HTTP responses."""

import falcon
import falcon.asgi

from grantkeeper.domain.exceptions import (
    NotFound,
    PermissionDenied,
    PreconditionFailed,
    Unauthorized,
)
from grantkeeper.logging import get_logger

log = get_logger(__name__)

_STATUS_BY_ERROR = (
    (Unauthorized, falcon.HTTP_401),
    (PermissionDenied, falcon.HTTP_403),
    (NotFound, falcon.HTTP_404),
    (PreconditionFailed, falcon.HTTP_400),
)


def _domain_error_handler(status: str):
    async def handle(req, resp, ex, params) -> None:
        resp.status = status
        resp.media = {"error": str(ex)}

    return handle


async def _log_exception(req, resp, ex, params) -> None:
    log.exception("unhandled_exception", method=req.method, path=req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install handlers. Falcon picks the most specific handler for each exception."""
    app.add_error_handler(Exception, _log_exception)
    for error, status in _STATUS_BY_ERROR:
        app.add_error_handler(error, _domain_error_handler(status))
