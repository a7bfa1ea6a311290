"""Add a user to a group."""

from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.domain.exceptions import PreconditionFailed
from grantkeeper.domain.value_objects import ANYONE, AnyoneHolder, GlobalScope
from grantkeeper.logging import get_logger

log = get_logger(__name__)


class AddUserToGroupUseCase:
    """Make a user member of a group. Caller must administer the group's organization."""

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
        login: str,
        group_id: int | None = None,
        group_name: str | None = None,
        organization_key: str | None = None,
    ) -> bool:
        """Return True when the membership was created, False when it already existed."""
        session.check_logged_in()
        async with self._uow_factory() as uow:
            organization, group = await self._support.find_group(
                uow, organization_key, group_id, group_name
            )
            await session.check_scope_admin(GlobalScope(organization.uuid))
            if isinstance(group, AnyoneHolder):
                raise PreconditionFailed(f"No user can be added to the group '{ANYONE}'")
            user = await self._support.find_user(uow, login)

            if await uow.groups.is_member(group.group_id, user.user_id):
                return False
            await uow.groups.add_member(group.group_id, user.user_id)

        log.info("user_added_to_group", login=user.login, group_id=group.group_id)
        return True
