"""Applies a batch of permission changes in one transaction."""

from collections.abc import Sequence

from grantkeeper.application.dto.permission_change import (
    GroupPermissionChange,
    PermissionChange,
    UserPermissionChange,
)
from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.group_permission_changer import (
    GroupPermissionChanger,
)
from grantkeeper.application.services.user_permission_changer import (
    UserPermissionChanger,
)
from grantkeeper.domain.exceptions import PreconditionFailed
from grantkeeper.domain.value_objects import ChangeResult, Rejected


class PermissionUpdater:
    """Checks the caller administers every scope, then applies all changes or none."""

    def __init__(
        self,
        unit_of_work_factory: type,
        user_permission_changer: UserPermissionChanger | None = None,
        group_permission_changer: GroupPermissionChanger | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._user_changer = user_permission_changer or UserPermissionChanger()
        self._group_changer = group_permission_changer or GroupPermissionChanger()

    async def apply(
        self, session: UserSession, changes: Sequence[PermissionChange]
    ) -> list[ChangeResult]:
        """Apply changes. Raises PreconditionFailed and rolls back on a rejected change."""
        for change in changes:
            await session.check_scope_admin(change.scope)

        results: list[ChangeResult] = []
        async with self._uow_factory() as uow:
            for change in changes:
                if isinstance(change, UserPermissionChange):
                    result = await self._user_changer.apply(uow, change)
                elif isinstance(change, GroupPermissionChange):
                    result = await self._group_changer.apply(uow, change)
                else:
                    raise ValueError(f"Unsupported permission change: {change!r}")
                if isinstance(result, Rejected):
                    raise PreconditionFailed(result.reason)
                results.append(result)
        return results
