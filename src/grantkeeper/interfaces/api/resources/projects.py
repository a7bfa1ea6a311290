"""Projects API resources."""

import falcon
import falcon.asgi

from grantkeeper.application.use_cases.project.search_my_projects import (
    SearchMyProjectsUseCase,
)
from grantkeeper.interfaces.api.resources.request_params import require_session


class SearchMyProjectsResource:
    """GET /api/projects/search_my_projects - projects the caller administers."""

    def __init__(self, search_my_projects: SearchMyProjectsUseCase) -> None:
        self._search = search_my_projects

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        session = require_session(req)
        result = await self._search.execute(
            session,
            query=req.get_param("q"),
            page=req.get_param_as_int("p", default=1),
            page_size=req.get_param_as_int("ps", default=100),
        )
        resp.media = {
            "paging": {
                "pageIndex": result.page,
                "pageSize": result.page_size,
                "total": result.total,
            },
            "projects": [
                {"id": p.uuid, "key": p.key, "name": p.name} for p in result.projects
            ],
        }
        resp.status = falcon.HTTP_200
