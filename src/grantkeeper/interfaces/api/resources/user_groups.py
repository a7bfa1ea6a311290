"""User groups API resources."""

import falcon
import falcon.asgi

from grantkeeper.application.use_cases.user_group.add_user_to_group import (
    AddUserToGroupUseCase,
)
from grantkeeper.application.use_cases.user_group.search_groups import SearchGroupsUseCase
from grantkeeper.interfaces.api.resources.request_params import (
    mandatory,
    optional_int,
    optional_str,
    read_body,
    require_session,
)


class AddUserToGroupResource:
    """POST /api/user_groups/add_user - add a member to a group."""

    def __init__(self, add_user_to_group: AddUserToGroupUseCase) -> None:
        self._add_user = add_user_to_group

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        session = require_session(req)
        body = await read_body(req)
        await self._add_user.execute(
            session,
            login=mandatory(body, "login"),
            group_id=optional_int(body, "id"),
            group_name=optional_str(body, "name"),
            organization_key=optional_str(body, "organization"),
        )
        resp.status = falcon.HTTP_204


class SearchGroupsResource:
    """GET /api/user_groups/search - list groups with member counts."""

    def __init__(self, search_groups: SearchGroupsUseCase) -> None:
        self._search = search_groups

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        session = require_session(req)
        page = req.get_param_as_int("p", default=1)
        page_size = req.get_param_as_int("ps", default=100)

        result = await self._search.execute(
            session,
            query=req.get_param("q"),
            page=page,
            page_size=page_size,
            organization_key=req.get_param("organization"),
        )
        resp.media = {
            "paging": {
                "pageIndex": result.page,
                "pageSize": result.page_size,
                "total": result.total,
            },
            "groups": [
                {
                    "id": g.group.id,
                    "name": g.group.name,
                    "description": g.group.description,
                    "membersCount": g.members_count,
                }
                for g in result.groups
            ],
        }
        resp.status = falcon.HTTP_200
