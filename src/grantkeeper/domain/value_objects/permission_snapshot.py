"""Immutable view of the permissions a principal holds."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


def _freeze(data: Mapping[str, frozenset[str]] | None) -> Mapping[str, frozenset[str]]:
    return MappingProxyType({k: frozenset(v) for k, v in (data or {}).items()})


@dataclass(frozen=True)
class PermissionSnapshot:
    """Effective permissions of one principal at load time.

    global_permissions is keyed by organization uuid, project_permissions by
    project uuid. Both already merge direct, group and Anyone grants.
    """

    global_permissions: Mapping[str, frozenset[str]] = field(default_factory=dict)
    project_permissions: Mapping[str, frozenset[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "global_permissions", _freeze(self.global_permissions))
        object.__setattr__(self, "project_permissions", _freeze(self.project_permissions))

    def global_permissions_of(self, organization_uuid: str) -> frozenset[str]:
        return self.global_permissions.get(organization_uuid, frozenset())

    def project_permissions_of(self, project_uuid: str) -> frozenset[str]:
        return self.project_permissions.get(project_uuid, frozenset())
