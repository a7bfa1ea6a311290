"""Permission catalog - global and project permission keys."""

from enum import StrEnum


class GlobalPermission(StrEnum):
    """Permissions that apply to a whole organization."""

    ADMINISTER = "admin"
    ADMINISTER_QUALITY_PROFILES = "profileadmin"
    ADMINISTER_QUALITY_GATES = "gateadmin"
    SCAN = "scan"
    PROVISION_PROJECTS = "provisioning"


class ProjectPermission(StrEnum):
    """Permissions that can be granted on a single project."""

    USER = "user"
    ADMIN = "admin"
    CODEVIEWER = "codeviewer"
    ISSUE_ADMIN = "issueadmin"
    SCAN = "scan"


SYSTEM_ADMIN = GlobalPermission.ADMINISTER.value

GLOBAL_PERMISSIONS: tuple[str, ...] = tuple(p.value for p in GlobalPermission)
PROJECT_PERMISSIONS: tuple[str, ...] = tuple(p.value for p in ProjectPermission)


def is_global_permission(permission: str) -> bool:
    return permission in GLOBAL_PERMISSIONS


def is_project_permission(permission: str) -> bool:
    return permission in PROJECT_PERMISSIONS
