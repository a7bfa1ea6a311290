"""Permission change requests."""

from dataclasses import dataclass

from grantkeeper.domain.value_objects import (
    GlobalScope,
    GroupOrAnyone,
    Operation,
    ProjectScope,
    Scope,
    UserHolder,
)


@dataclass(frozen=True)
class PermissionChange:
    """Add or remove one permission in the scope of an organization or a project."""

    operation: Operation
    organization_uuid: str
    permission: str
    project_uuid: str | None = None

    @property
    def scope(self) -> Scope:
        if self.project_uuid is None:
            return GlobalScope(self.organization_uuid)
        return ProjectScope(self.project_uuid, self.organization_uuid)

    @property
    def is_global(self) -> bool:
        return self.project_uuid is None


@dataclass(frozen=True)
class UserPermissionChange(PermissionChange):
    """Permission change targeting a user."""

    user: UserHolder | None = None

    def __post_init__(self) -> None:
        if self.user is None:
            raise ValueError("user is required")


@dataclass(frozen=True)
class GroupPermissionChange(PermissionChange):
    """Permission change targeting a group or Anyone."""

    group: GroupOrAnyone | None = None

    def __post_init__(self) -> None:
        if self.group is None:
            raise ValueError("group is required")
