"""Permission template API resources."""

import falcon
import falcon.asgi

from grantkeeper.application.use_cases.permission_template.create_template import (
    CreateTemplateUseCase,
)
from grantkeeper.application.use_cases.permission_template.remove_user_from_template import (
    RemoveUserFromTemplateUseCase,
)
from grantkeeper.application.use_cases.permission_template.template_groups import (
    TemplateGroupsUseCase,
)
from grantkeeper.domain.value_objects import GroupHolder
from grantkeeper.interfaces.api.resources.request_params import (
    mandatory,
    optional_str,
    read_body,
    require_session,
)


def _isoformat(value) -> str | None:
    return value.isoformat() if value is not None else None


class CreateTemplateResource:
    """POST /api/permissions/create_template."""

    def __init__(self, create_template: CreateTemplateUseCase) -> None:
        self._create = create_template

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        session = require_session(req)
        body = await read_body(req)
        template = await self._create.execute(
            session,
            name=mandatory(body, "name"),
            description=optional_str(body, "description"),
            project_key_pattern=optional_str(body, "project_key_pattern"),
            organization_key=optional_str(body, "organization"),
        )
        resp.media = {
            "permissionTemplate": {
                "id": template.uuid,
                "name": template.name,
                "description": template.description,
                "projectKeyPattern": template.key_pattern,
                "createdAt": _isoformat(template.created_at),
                "updatedAt": _isoformat(template.updated_at),
            }
        }
        resp.status = falcon.HTTP_200


class RemoveUserFromTemplateResource:
    """POST /api/permissions/remove_user_from_template."""

    def __init__(self, remove_user_from_template: RemoveUserFromTemplateUseCase) -> None:
        self._remove = remove_user_from_template

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        session = require_session(req)
        body = await read_body(req)
        await self._remove.execute(
            session,
            login=mandatory(body, "login"),
            permission=mandatory(body, "permission"),
            template_id=optional_str(body, "template_id"),
            template_name=optional_str(body, "template_name"),
            organization_key=optional_str(body, "organization"),
        )
        resp.status = falcon.HTTP_204


class TemplateGroupsResource:
    """GET /api/permissions/template_groups - groups of a template and their permissions."""

    def __init__(self, template_groups: TemplateGroupsUseCase) -> None:
        self._template_groups = template_groups

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        session = require_session(req)
        result = await self._template_groups.execute(
            session,
            template_id=req.get_param("template_id"),
            template_name=req.get_param("template_name"),
            permission=req.get_param("permission"),
            query=req.get_param("q"),
            page=req.get_param_as_int("p", default=1),
            page_size=req.get_param_as_int("ps", default=20),
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
                    "id": g.holder.group_id if isinstance(g.holder, GroupHolder) else None,
                    "name": g.name,
                    "description": g.description,
                    "permissions": g.permissions,
                }
                for g in result.groups
            ],
        }
        resp.status = falcon.HTTP_200
