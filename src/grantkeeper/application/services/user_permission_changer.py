"""Applies permission changes targeting users."""

from grantkeeper.application.dto.permission_change import UserPermissionChange
from grantkeeper.application.ports import UnitOfWork
from grantkeeper.domain.entities import Grant
from grantkeeper.domain.value_objects import (
    APPLIED,
    SYSTEM_ADMIN,
    UNCHANGED,
    ChangeResult,
    Operation,
    Rejected,
)
from grantkeeper.logging import get_logger

log = get_logger(__name__)

LAST_ADMIN_MESSAGE = "Last user with '%s' permission. Permission cannot be removed."


class UserPermissionChanger:
    """Adds or removes one user grant.

    Caller authorization is checked by PermissionUpdater before apply() runs;
    apply() must be called inside the unit of work that will persist the change.
    """

    async def apply(self, uow: UnitOfWork, change: UserPermissionChange) -> ChangeResult:
        """Insert or delete the grant, or report why nothing was written."""
        await uow.grants.lock_organization(change.organization_uuid)

        if await self._should_skip(uow, change):
            log.debug(
                "user_permission_change_skipped",
                operation=change.operation.value,
                login=change.user.login,
                permission=change.permission,
                project_uuid=change.project_uuid,
            )
            return UNCHANGED

        grant = Grant(
            organization_uuid=change.organization_uuid,
            holder=change.user,
            permission=change.permission,
            scope=change.scope,
        )
        if change.operation is Operation.ADD:
            await uow.grants.insert(grant)
        elif change.operation is Operation.REMOVE:
            if await self._is_last_admin(uow, change):
                log.info(
                    "last_admin_removal_rejected",
                    login=change.user.login,
                    organization_uuid=change.organization_uuid,
                )
                return Rejected(LAST_ADMIN_MESSAGE % SYSTEM_ADMIN)
            await uow.grants.delete(grant)
        else:
            raise ValueError(f"Unsupported permission change: {change.operation!r}")

        log.info(
            "user_permission_changed",
            operation=change.operation.value,
            login=change.user.login,
            permission=change.permission,
            project_uuid=change.project_uuid,
        )
        return APPLIED

    async def _should_skip(self, uow: UnitOfWork, change: UserPermissionChange) -> bool:
        existing = await uow.grants.select_permissions(
            change.organization_uuid, change.user, change.scope
        )
        if change.operation is Operation.ADD:
            return change.permission in existing
        if change.operation is Operation.REMOVE:
            return change.permission not in existing
        return False

    async def _is_last_admin(self, uow: UnitOfWork, change: UserPermissionChange) -> bool:
        if change.permission != SYSTEM_ADMIN or not change.is_global:
            return False
        remaining = await uow.grants.count_global_admins(
            change.organization_uuid,
            SYSTEM_ADMIN,
            excluding_user_id=change.user.user_id,
        )
        return remaining == 0
