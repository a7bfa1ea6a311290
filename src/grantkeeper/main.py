"""Application entry point and composition root."""

from importlib.metadata import version

import falcon.asgi

from grantkeeper.application.services.permission_request_support import (
    PermissionRequestSupport,
)
from grantkeeper.application.services.permission_updater import PermissionUpdater
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
from grantkeeper.config import get_settings
from grantkeeper.domain.value_objects import Operation
from grantkeeper.infrastructure.auth.keycloak_provider import KeycloakProvider
from grantkeeper.infrastructure.persistence.postgres.connection import create_pool
from grantkeeper.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from grantkeeper.infrastructure.session.session_factory import ServerUserSessionFactory
from grantkeeper.interfaces.api.app import UseCases, create_app
from grantkeeper.interfaces.api.middleware.auth import AuthMiddleware
from grantkeeper.interfaces.api.middleware.cors import CORSMiddleware
from grantkeeper.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from grantkeeper.interfaces.api.resources.health import HealthResource
from grantkeeper.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_grantkeeper_app() -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    setup_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        acquire_timeout=settings.db_pool_timeout,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        log.warning("keycloak_disabled", reason="KEYCLOAK_CLIENT_SECRET is empty")

    support = PermissionRequestSupport()
    updater = PermissionUpdater(uow_factory)
    use_cases = UseCases(
        add_user_permission=ChangeUserPermissionUseCase(
            Operation.ADD, uow_factory, updater, support
        ),
        remove_user_permission=ChangeUserPermissionUseCase(
            Operation.REMOVE, uow_factory, updater, support
        ),
        add_group_permission=ChangeGroupPermissionUseCase(
            Operation.ADD, uow_factory, updater, support
        ),
        remove_group_permission=ChangeGroupPermissionUseCase(
            Operation.REMOVE, uow_factory, updater, support
        ),
        create_template=CreateTemplateUseCase(uow_factory, support),
        remove_user_from_template=RemoveUserFromTemplateUseCase(uow_factory, support),
        template_groups=TemplateGroupsUseCase(uow_factory, support),
        add_user_to_group=AddUserToGroupUseCase(uow_factory, support),
        search_groups=SearchGroupsUseCase(uow_factory, support),
        search_my_projects=SearchMyProjectsUseCase(uow_factory, support),
        unset_root=UnsetRootUseCase(uow_factory),
    )

    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(
        use_cases,
        middleware=[
            CORSMiddleware(cors_origins),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(ServerUserSessionFactory(uow_factory), keycloak),
        ],
        health_resource=HealthResource(pool),
    )


def main() -> None:
    """CLI entry point - run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    app = create_grantkeeper_app()
    log.info("starting", version=version("grantkeeper"), host=settings.host, port=settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
