"""Search the projects the caller administers."""

from dataclasses import dataclass

from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.domain.entities import Component
from grantkeeper.domain.exceptions import ValidationError
from grantkeeper.domain.value_objects import ProjectPermission

MIN_QUERY_LENGTH = 3


@dataclass
class SearchMyProjectsResult:
    """One page of projects."""

    projects: list[Component]
    page: int
    page_size: int
    total: int


class SearchMyProjectsUseCase:
    """Projects on which the caller holds project admin, directly or through a group.

    Views, global permissions and Anyone grants do not count. Sorted by name.
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
        query: str | None = None,
        page: int = 1,
        page_size: int = 100,
    ) -> SearchMyProjectsResult:
        session.check_logged_in()
        self._support.validate_paging(page, page_size)
        query = (query or "").strip() or None
        if query is not None and len(query) < MIN_QUERY_LENGTH:
            raise ValidationError(
                f"The 'q' parameter must have at least {MIN_QUERY_LENGTH} characters"
            )

        permission = ProjectPermission.ADMIN.value
        async with self._uow_factory() as uow:
            total = await uow.components.count_projects_with_permission(
                session.user_id, permission, query=query
            )
            projects = await uow.components.search_projects_with_permission(
                session.user_id,
                permission,
                query=query,
                offset=(page - 1) * page_size,
                limit=page_size,
            )
        return SearchMyProjectsResult(
            projects=projects, page=page, page_size=page_size, total=total
        )
