"""Remove a permission of a user from a permission template."""

from grantkeeper.application.ports import UserSession
from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.domain.value_objects import GlobalScope
from grantkeeper.logging import get_logger

log = get_logger(__name__)


class RemoveUserFromTemplateUseCase:
    """Drop one user permission of a template. Removing a missing permission is a no-op."""

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
        permission: str,
        template_id: str | None = None,
        template_name: str | None = None,
        organization_key: str | None = None,
    ) -> None:
        session.check_logged_in()
        self._support.validate_project_permission(permission)
        async with self._uow_factory() as uow:
            template = await self._support.find_template(
                uow, template_id, template_name, organization_key
            )
            await session.check_scope_admin(GlobalScope(template.organization_uuid))
            user = await self._support.find_user(uow, login)
            await uow.templates.delete_grant(template.uuid, user, permission)

        log.info(
            "user_removed_from_template",
            template_uuid=template.uuid,
            login=user.login,
            permission=permission,
        )
