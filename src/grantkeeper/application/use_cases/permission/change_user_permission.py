"""Add or remove a permission of a user."""

from grantkeeper.application.dto.permission_change import UserPermissionChange
from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.application.services.permission_updater import PermissionUpdater
from grantkeeper.domain.value_objects import ChangeResult, Operation


class ChangeUserPermissionUseCase:
    """Grant (ADD) or revoke (REMOVE) a global or project permission of a user."""

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
        login: str,
        permission: str,
        project_id: str | None = None,
        project_key: str | None = None,
        organization_key: str | None = None,
    ) -> ChangeResult:
        """Resolve references, then apply the change. Caller must administer the scope."""
        async with self._uow_factory() as uow:
            user = await self._support.find_user(uow, login)
            project = await self._support.find_project(uow, project_id, project_key)
            if project is not None:
                organization_uuid = project.organization_uuid
            else:
                organization = await self._support.find_organization(uow, organization_key)
                organization_uuid = organization.uuid
        self._support.validate_permission(permission, project)

        change = UserPermissionChange(
            operation=self._operation,
            organization_uuid=organization_uuid,
            permission=permission,
            project_uuid=project.uuid if project else None,
            user=user,
        )
        results = await self._updater.apply(session, [change])
        return results[0]
