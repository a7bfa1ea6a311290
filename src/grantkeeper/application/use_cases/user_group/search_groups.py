"""Search groups of an organization."""

from dataclasses import dataclass

from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.domain.entities import GroupWithMembersCount


@dataclass
class SearchGroupsResult:
    """One page of groups."""

    groups: list[GroupWithMembersCount]
    page: int
    page_size: int
    total: int


class SearchGroupsUseCase:
    """List groups by name, with their member count. Caller must be logged in."""

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
        organization_key: str | None = None,
    ) -> SearchGroupsResult:
        session.check_logged_in()
        self._support.validate_paging(page, page_size)

        query = (query or "").strip() or None
        async with self._uow_factory() as uow:
            organization = await self._support.find_organization(uow, organization_key)
            total = await uow.groups.count(organization.uuid, query=query)
            groups = await uow.groups.search(
                organization.uuid,
                query=query,
                offset=(page - 1) * page_size,
                limit=page_size,
            )
        return SearchGroupsResult(groups=groups, page=page, page_size=page_size, total=total)
