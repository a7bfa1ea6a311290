"""Applies permission changes targeting groups and Anyone."""

from grantkeeper.application.dto.permission_change import GroupPermissionChange
from grantkeeper.application.ports import UnitOfWork
from grantkeeper.domain.entities import Grant
from grantkeeper.domain.value_objects import (
    ANYONE,
    APPLIED,
    SYSTEM_ADMIN,
    UNCHANGED,
    AnyoneHolder,
    ChangeResult,
    GroupHolder,
    Operation,
    Rejected,
)
from grantkeeper.logging import get_logger

log = get_logger(__name__)


class GroupPermissionChanger:
    """Adds or removes one group (or Anyone) grant."""

    async def apply(self, uow: UnitOfWork, change: GroupPermissionChange) -> ChangeResult:
        await uow.grants.lock_organization(change.organization_uuid)

        existing = await uow.grants.select_permissions(
            change.organization_uuid, change.group, change.scope
        )
        grant = Grant(
            organization_uuid=change.organization_uuid,
            holder=change.group,
            permission=change.permission,
            scope=change.scope,
        )

        if change.operation is Operation.ADD:
            if change.permission in existing:
                return UNCHANGED
            if (
                isinstance(change.group, AnyoneHolder)
                and change.is_global
                and change.permission == SYSTEM_ADMIN
            ):
                return Rejected(
                    f"It is not possible to add the '{SYSTEM_ADMIN}' permission "
                    f"to the group '{ANYONE}'"
                )
            await uow.grants.insert(grant)
        elif change.operation is Operation.REMOVE:
            if change.permission not in existing:
                return UNCHANGED
            if await self._is_last_admin_group(uow, change):
                log.info(
                    "last_admin_group_removal_rejected",
                    group=_describe(change),
                    organization_uuid=change.organization_uuid,
                )
                return Rejected(
                    f"Last group with permission '{SYSTEM_ADMIN}'. "
                    "Permission cannot be removed."
                )
            await uow.grants.delete(grant)
        else:
            raise ValueError(f"Unsupported permission change: {change.operation!r}")

        log.info(
            "group_permission_changed",
            operation=change.operation.value,
            group=_describe(change),
            permission=change.permission,
            project_uuid=change.project_uuid,
        )
        return APPLIED

    async def _is_last_admin_group(
        self, uow: UnitOfWork, change: GroupPermissionChange
    ) -> bool:
        # Anyone never counts as an administrator, removing it cannot break the invariant.
        if not isinstance(change.group, GroupHolder):
            return False
        if change.permission != SYSTEM_ADMIN or not change.is_global:
            return False
        remaining = await uow.grants.count_global_admins(
            change.organization_uuid,
            SYSTEM_ADMIN,
            excluding_group_id=change.group.group_id,
        )
        return remaining == 0


def _describe(change: GroupPermissionChange) -> str:
    if isinstance(change.group, GroupHolder):
        return str(change.group.group_id)
    return ANYONE
