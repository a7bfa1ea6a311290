"""Domain entities."""

from grantkeeper.domain.entities.component import Component
from grantkeeper.domain.entities.grant import Grant
from grantkeeper.domain.entities.group import Group, GroupWithMembersCount
from grantkeeper.domain.entities.organization import Organization
from grantkeeper.domain.entities.permission_template import PermissionTemplate, TemplateGroup
from grantkeeper.domain.entities.user import User

__all__ = [
    "Component",
    "Grant",
    "Group",
    "GroupWithMembersCount",
    "Organization",
    "PermissionTemplate",
    "TemplateGroup",
    "User",
]
