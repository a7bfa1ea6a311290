"""Grant scopes - organization-wide or single project."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GlobalScope:
    """Applies to every project of the organization."""

    organization_uuid: str


@dataclass(frozen=True)
class ProjectScope:
    """Applies to one project (or view)."""

    project_uuid: str
    organization_uuid: str


Scope = GlobalScope | ProjectScope


def project_uuid_of(scope: Scope) -> str | None:
    """Project uuid of scope, None for global scope."""
    if isinstance(scope, ProjectScope):
        return scope.project_uuid
    return None
