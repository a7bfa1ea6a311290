"""Permissions API resources."""

import falcon
import falcon.asgi

from grantkeeper.application.use_cases.permission.change_group_permission import (
    ChangeGroupPermissionUseCase,
)
from grantkeeper.application.use_cases.permission.change_user_permission import (
    ChangeUserPermissionUseCase,
)
from grantkeeper.interfaces.api.resources.request_params import (
    mandatory,
    optional_int,
    optional_str,
    read_body,
    require_session,
)


class UserPermissionResource:
    """POST /api/permissions/add_user and /api/permissions/remove_user."""

    def __init__(self, change_user_permission: ChangeUserPermissionUseCase) -> None:
        self._change = change_user_permission

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Add or remove a global or project permission of a user."""
        session = require_session(req)
        body = await read_body(req)
        await self._change.execute(
            session,
            login=mandatory(body, "login"),
            permission=mandatory(body, "permission"),
            project_id=optional_str(body, "project_id"),
            project_key=optional_str(body, "project_key"),
            organization_key=optional_str(body, "organization"),
        )
        resp.status = falcon.HTTP_204


class GroupPermissionResource:
    """POST /api/permissions/add_group and /api/permissions/remove_group."""

    def __init__(self, change_group_permission: ChangeGroupPermissionUseCase) -> None:
        self._change = change_group_permission

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Add or remove a permission of a group, referenced by id or by name."""
        session = require_session(req)
        body = await read_body(req)
        await self._change.execute(
            session,
            permission=mandatory(body, "permission"),
            group_id=optional_int(body, "group_id"),
            group_name=optional_str(body, "group_name"),
            project_id=optional_str(body, "project_id"),
            project_key=optional_str(body, "project_key"),
            organization_key=optional_str(body, "organization"),
        )
        resp.status = falcon.HTTP_204
