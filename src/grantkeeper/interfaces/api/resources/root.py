"""Root users API resources."""

import falcon
import falcon.asgi

from grantkeeper.application.use_cases.root.unset_root import UnsetRootUseCase
from grantkeeper.interfaces.api.resources.request_params import (
    optional_str,
    read_body,
    require_session,
)


class UnsetRootResource:
    """POST /api/root/unset_root."""

    def __init__(self, unset_root: UnsetRootUseCase) -> None:
        self._unset_root = unset_root

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        session = require_session(req)
        body = await read_body(req)
        await self._unset_root.execute(session, login=optional_str(body, "login"))
        resp.status = falcon.HTTP_204
