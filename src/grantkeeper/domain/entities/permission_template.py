"""Permission template entity."""

from dataclasses import dataclass, field
from datetime import datetime

from grantkeeper.domain.value_objects import GroupOrAnyone


@dataclass
class PermissionTemplate:
    """Set of project permissions to apply to new projects.

    key_pattern is a regular expression selecting the project keys the
    template applies to by default.
    """

    uuid: str
    organization_uuid: str
    name: str
    description: str | None = None
    key_pattern: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class TemplateGroup:
    """Group (or Anyone) listed for a template, with its permissions in that template."""

    holder: GroupOrAnyone
    name: str
    description: str | None = None
    permissions: list[str] = field(default_factory=list)
