"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from grantkeeper.application.use_cases.permission.change_group_permission import (
    ChangeGroupPermissionUseCase,
)
from grantkeeper.application.use_cases.permission.change_user_permission import (
    ChangeUserPermissionUseCase,
)
from grantkeeper.application.use_cases.permission_template.create_template import (
    CreateTemplateUseCase,
)
from grantkeeper.application.use_cases.permission_template.remove_user_from_template import (
    RemoveUserFromTemplateUseCase,
)
from grantkeeper.application.use_cases.permission_template.template_groups import (
    TemplateGroupsUseCase,
)
from grantkeeper.application.use_cases.project.search_my_projects import (
    SearchMyProjectsUseCase,
)
from grantkeeper.application.use_cases.root.unset_root import UnsetRootUseCase
from grantkeeper.application.use_cases.user_group.add_user_to_group import (
    AddUserToGroupUseCase,
)
from grantkeeper.application.use_cases.user_group.search_groups import SearchGroupsUseCase
from grantkeeper.interfaces.api.errors import register_error_handlers
from grantkeeper.interfaces.api.resources.health import HealthResource
from grantkeeper.interfaces.api.resources.permission_templates import (
    CreateTemplateResource,
    RemoveUserFromTemplateResource,
    TemplateGroupsResource,
)
from grantkeeper.interfaces.api.resources.permissions import (
    GroupPermissionResource,
    UserPermissionResource,
)
from grantkeeper.interfaces.api.resources.projects import SearchMyProjectsResource
from grantkeeper.interfaces.api.resources.root import UnsetRootResource
from grantkeeper.interfaces.api.resources.user_groups import (
    AddUserToGroupResource,
    SearchGroupsResource,
)


@dataclass
class UseCases:
    """Use cases exposed by the web API."""

    add_user_permission: ChangeUserPermissionUseCase
    remove_user_permission: ChangeUserPermissionUseCase
    add_group_permission: ChangeGroupPermissionUseCase
    remove_group_permission: ChangeGroupPermissionUseCase
    create_template: CreateTemplateUseCase
    remove_user_from_template: RemoveUserFromTemplateUseCase
    template_groups: TemplateGroupsUseCase
    add_user_to_group: AddUserToGroupUseCase
    search_groups: SearchGroupsUseCase
    search_my_projects: SearchMyProjectsUseCase
    unset_root: UnsetRootUseCase


def create_app(
    use_cases: UseCases,
    middleware: list,
    health_resource: HealthResource | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware)
    register_error_handlers(app)

    health = health_resource or HealthResource()
    app.add_route("/api/health", health)
    app.add_route("/api/health/ready", health, suffix="ready")
    app.add_route(
        "/api/permissions/add_user", UserPermissionResource(use_cases.add_user_permission)
    )
    app.add_route(
        "/api/permissions/remove_user", UserPermissionResource(use_cases.remove_user_permission)
    )
    app.add_route(
        "/api/permissions/add_group", GroupPermissionResource(use_cases.add_group_permission)
    )
    app.add_route(
        "/api/permissions/remove_group",
        GroupPermissionResource(use_cases.remove_group_permission),
    )
    app.add_route(
        "/api/permissions/create_template", CreateTemplateResource(use_cases.create_template)
    )
    app.add_route(
        "/api/permissions/remove_user_from_template",
        RemoveUserFromTemplateResource(use_cases.remove_user_from_template),
    )
    app.add_route(
        "/api/permissions/template_groups", TemplateGroupsResource(use_cases.template_groups)
    )
    app.add_route("/api/user_groups/add_user", AddUserToGroupResource(use_cases.add_user_to_group))
    app.add_route("/api/user_groups/search", SearchGroupsResource(use_cases.search_groups))
    app.add_route(
        "/api/projects/search_my_projects", SearchMyProjectsResource(use_cases.search_my_projects)
    )
    app.add_route("/api/root/unset_root", UnsetRootResource(use_cases.unset_root))
    return app
