"""Permission evaluation - pure predicates over a PermissionSnapshot."""

from grantkeeper.domain.value_objects import (
    GlobalScope,
    PermissionSnapshot,
    ProjectScope,
    Scope,
)


def has_global_permission(
    snapshot: PermissionSnapshot, permission: str, organization_uuid: str
) -> bool:
    """Permission held on the organization through a user, group or Anyone grant."""
    return permission in snapshot.global_permissions_of(organization_uuid)


def has_project_permission(
    snapshot: PermissionSnapshot, permission: str, project: ProjectScope | None
) -> bool:
    """Permission held on the project, or globally in its organization.

    project is None when a component reference did not resolve to a real
    project; such a reference never authorizes anything.
    """
    if project is None:
        return False
    if has_global_permission(snapshot, permission, project.organization_uuid):
        return True
    return permission in snapshot.project_permissions_of(project.project_uuid)


def has_permission(snapshot: PermissionSnapshot, permission: str, scope: Scope | None) -> bool:
    """Evaluate permission against a global or project scope."""
    if isinstance(scope, GlobalScope):
        return has_global_permission(snapshot, permission, scope.organization_uuid)
    if isinstance(scope, ProjectScope):
        return has_project_permission(snapshot, permission, scope)
    return False
