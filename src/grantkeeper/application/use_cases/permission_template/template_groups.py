"""List the groups of a permission template."""

from dataclasses import dataclass

from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.domain.entities import TemplateGroup
from grantkeeper.domain.value_objects import GlobalScope


@dataclass
class TemplateGroupsResult:
    """One page of template groups."""

    groups: list[TemplateGroup]
    page: int
    page_size: int
    total: int


class TemplateGroupsUseCase:
    """Groups of a template with their permissions in it.

    Without query, only Anyone and the groups holding a permission in the
    template are listed (holding permission, when given). With query, every
    group of the organization whose name contains it is listed, Anyone
    included when its name matches. Anyone comes first, then groups by name.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        support: PermissionRequestSupport | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._support = support or PermissionRequestSupport()

    async def execute(
        self,
        session: UserSession,
        template_id: str | None = None,
        template_name: str | None = None,
        permission: str | None = None,
        query: str | None = None,
        page: int = 1,
        page_size: int = 20,
        organization_key: str | None = None,
    ) -> TemplateGroupsResult:
        session.check_logged_in()
        if permission:
            self._support.validate_project_permission(permission)
        self._support.validate_paging(page, page_size)

        query = (query or "").strip() or None
        async with self._uow_factory() as uow:
            template = await self._support.find_template(
                uow, template_id, template_name, organization_key
            )
            await session.check_scope_admin(GlobalScope(template.organization_uuid))
            total = await uow.templates.count_groups(
                template, permission=permission, query=query
            )
            groups = await uow.templates.search_groups(
                template,
                permission=permission,
                query=query,
                offset=(page - 1) * page_size,
                limit=page_size,
            )
        return TemplateGroupsResult(groups=groups, page=page, page_size=page_size, total=total)
