"""Fixtures for API tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from falcon.testing import TestClient

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
from grantkeeper.domain.value_objects import Operation
from grantkeeper.infrastructure.auth.keycloak_provider import OIDCUser
from grantkeeper.infrastructure.session.session_factory import ServerUserSessionFactory
from grantkeeper.interfaces.api.app import UseCases, create_app
from grantkeeper.interfaces.api.middleware.auth import AuthMiddleware


def _decode_token(token: str) -> OIDCUser | None:
    """Test tokens are the login itself; "invalid" is rejected."""
    if token == "invalid":
        return None
    return OIDCUser(subject=f"sub-{token}", login=token, email=None)


@pytest.fixture
def keycloak_provider():
    """KeycloakProvider stand-in resolving "Bearer <login>" tokens."""
    provider = MagicMock()
    provider.decode_token = AsyncMock(side_effect=_decode_token)
    return provider


@pytest.fixture
def app(uow_factory, keycloak_provider):
    """Falcon ASGI app with API resources for testing."""
    updater = PermissionUpdater(uow_factory)
    use_cases = UseCases(
        add_user_permission=ChangeUserPermissionUseCase(Operation.ADD, uow_factory, updater),
        remove_user_permission=ChangeUserPermissionUseCase(
            Operation.REMOVE, uow_factory, updater
        ),
        add_group_permission=ChangeGroupPermissionUseCase(Operation.ADD, uow_factory, updater),
        remove_group_permission=ChangeGroupPermissionUseCase(
            Operation.REMOVE, uow_factory, updater
        ),
        create_template=CreateTemplateUseCase(uow_factory),
        remove_user_from_template=RemoveUserFromTemplateUseCase(uow_factory),
        template_groups=TemplateGroupsUseCase(uow_factory),
        add_user_to_group=AddUserToGroupUseCase(uow_factory),
        search_groups=SearchGroupsUseCase(uow_factory),
        search_my_projects=SearchMyProjectsUseCase(uow_factory),
        unset_root=UnsetRootUseCase(uow_factory),
    )
    middleware = [AuthMiddleware(ServerUserSessionFactory(uow_factory), keycloak_provider)]
    return create_app(use_cases, middleware=middleware)


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
