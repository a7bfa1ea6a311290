"""Resolves request parameters into the identifiers used by grants."""

from grantkeeper.application.ports import UnitOfWork
from grantkeeper.domain.entities import Component, Organization, PermissionTemplate
from grantkeeper.domain.exceptions import NotFound, PreconditionFailed, ValidationError
from grantkeeper.domain.value_objects import (
    GLOBAL_PERMISSIONS,
    PROJECT_PERMISSIONS,
    AnyoneHolder,
    GroupHolder,
    GroupOrAnyone,
    UserHolder,
    is_anyone,
    is_global_permission,
    is_project_permission,
)

MAX_PAGE_SIZE = 500


class PermissionRequestSupport:
    """Lookups shared by the permission and user group use cases.

    Every finder raises NotFound for unknown references; the caller's unit of
    work decides the transaction.
    """

    async def find_user(self, uow: UnitOfWork, login: str) -> UserHolder:
        user = await uow.users.get_by_login(login)
        if user is None or not user.active:
            raise NotFound("User", login)
        return UserHolder(user_id=user.id, login=user.login)

    async def find_organization(self, uow: UnitOfWork, key: str | None) -> Organization:
        """Organization by key, or the default organization when key is empty."""
        if not key:
            return await uow.organizations.get_default()
        organization = await uow.organizations.get_by_key(key)
        if organization is None:
            raise NotFound("Organization", key)
        return organization

    async def find_project(
        self,
        uow: UnitOfWork,
        project_id: str | None,
        project_key: str | None,
    ) -> Component | None:
        """Project or view referenced by uuid or key, None when neither is given."""
        if project_id and project_key:
            raise PreconditionFailed("Project id or project key can be provided, not both.")
        if project_id:
            component = await uow.components.get_by_uuid(project_id)
            if component is None:
                raise NotFound("Project id", project_id)
        elif project_key:
            component = await uow.components.get_by_key(project_key)
            if component is None:
                raise NotFound("Project key", project_key)
        else:
            return None
        if not component.is_permission_root:
            raise PreconditionFailed(
                f"Component '{component.key}' (qualifier '{component.qualifier}') "
                "is not a project"
            )
        return component

    async def find_group(
        self,
        uow: UnitOfWork,
        organization_key: str | None,
        group_id: int | None,
        group_name: str | None,
    ) -> tuple[Organization, GroupOrAnyone]:
        """Group referenced by id, or by name within an organization.

        A group referenced by id always belongs to its own organization; the
        name "Anyone" (any case) designates the Anyone pseudo-group.
        """
        if group_id is not None and group_name:
            raise PreconditionFailed("Group id or group name must be provided, not both.")
        if group_id is not None:
            group = await uow.groups.get_by_id(group_id)
            if group is None:
                raise NotFound("Group id", group_id)
            organization = await uow.organizations.get_by_uuid(group.organization_uuid)
            if organization is None:
                raise NotFound("Organization", group.organization_uuid)
            return organization, GroupHolder(group.id)
        if not group_name:
            raise PreconditionFailed("Group id or group name must be provided.")
        organization = await self.find_organization(uow, organization_key)
        if is_anyone(group_name):
            return organization, AnyoneHolder()
        group = await uow.groups.get_by_name(organization.uuid, group_name)
        if group is None:
            raise NotFound("Group", f"{organization.key}/{group_name}")
        return organization, GroupHolder(group.id)

    async def find_template(
        self,
        uow: UnitOfWork,
        template_id: str | None,
        template_name: str | None,
        organization_key: str | None = None,
    ) -> PermissionTemplate:
        """Template referenced by uuid, or by name (any case) within an organization."""
        if template_id and template_name:
            raise PreconditionFailed("Template name or template id must be provided, not both.")
        if template_id:
            template = await uow.templates.get_by_uuid(template_id)
            if template is None:
                raise NotFound("Permission template with id", template_id)
            return template
        if not template_name:
            raise PreconditionFailed("Template name or template id must be provided.")
        organization = await self.find_organization(uow, organization_key)
        template = await uow.templates.get_by_name(organization.uuid, template_name)
        if template is None:
            raise NotFound("Permission template", template_name)
        return template

    def validate_permission(self, permission: str, project: Component | None) -> None:
        """Check permission belongs to the catalog of the requested scope."""
        if project is None:
            if not is_global_permission(permission):
                raise ValidationError(
                    "The 'permission' parameter for global permissions must be one of "
                    f"{', '.join(GLOBAL_PERMISSIONS)}. '{permission}' was passed."
                )
        else:
            self.validate_project_permission(permission)

    def validate_project_permission(self, permission: str) -> None:
        if not is_project_permission(permission):
            raise ValidationError(
                "The 'permission' parameter for project permissions must be one of "
                f"{', '.join(PROJECT_PERMISSIONS)}. '{permission}' was passed."
            )

    def validate_paging(self, page: int, page_size: int) -> None:
        if page < 1:
            raise ValidationError("Page index must be strictly positive")
        if page_size < 1 or page_size > MAX_PAGE_SIZE:
            raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
