"""Repository ports."""

from grantkeeper.application.ports.repositories.component_repository import (
    ComponentRepository,
)
from grantkeeper.application.ports.repositories.grant_repository import GrantRepository
from grantkeeper.application.ports.repositories.group_repository import GroupRepository
from grantkeeper.application.ports.repositories.organization_repository import (
    OrganizationRepository,
)
from grantkeeper.application.ports.repositories.permission_template_repository import (
    PermissionTemplateRepository,
)
from grantkeeper.application.ports.repositories.user_repository import UserRepository

__all__ = [
    "ComponentRepository",
    "GrantRepository",
    "GroupRepository",
    "OrganizationRepository",
    "PermissionTemplateRepository",
    "UserRepository",
]
