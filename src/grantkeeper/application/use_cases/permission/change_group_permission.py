"""Add or remove a permission of a group."""

from grantkeeper.application.dto.permission_change import GroupPermissionChange
from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.application.services.permission_updater import PermissionUpdater
from grantkeeper.domain.exceptions import PreconditionFailed
from grantkeeper.domain.value_objects import ChangeResult, Operation


class ChangeGroupPermissionUseCase:
    """Grant or revoke a permission of a group, or of Anyone."""

    def __init__(
        self,
        operation: Operation,
        unit_of_work_factory: type,
        permission_updater: PermissionUpdater,
        support: PermissionRequestSupport | None = None,
    ) -> None:
        self._operation = operation
        self._uow_factory = unit_of_work_factory
        self._updater = permission_updater
        self._support = support or PermissionRequestSupport()

    async def execute(
        self,
        session: UserSession,
        permission: str,
        group_id: int | None = None,
        group_name: str | None = None,
        project_id: str | None = None,
        project_key: str | None = None,
        organization_key: str | None = None,
    ) -> ChangeResult:
        async with self._uow_factory() as uow:
            organization, group = await self._support.find_group(
                uow, organization_key, group_id, group_name
            )
            project = await self._support.find_project(uow, project_id, project_key)
        self._support.validate_permission(permission, project)
        if project is not None and project.organization_uuid != organization.uuid:
            raise PreconditionFailed(
                f"Organization of group and project must match. Group is in "
                f"'{organization.key}' while project '{project.key}' is not."
            )

        change = GroupPermissionChange(
            operation=self._operation,
            organization_uuid=organization.uuid,
            permission=permission,
            project_uuid=project.uuid if project else None,
            group=group,
        )
        results = await self._updater.apply(session, [change])
        return results[0]
