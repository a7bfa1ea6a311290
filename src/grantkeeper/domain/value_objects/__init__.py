"""Domain value objects."""

from grantkeeper.domain.value_objects.change_result import (
    APPLIED,
    UNCHANGED,
    Applied,
    ChangeResult,
    Rejected,
    Unchanged,
)
from grantkeeper.domain.value_objects.component_qualifier import (
    PERMISSION_ROOT_QUALIFIERS,
    Qualifier,
)
from grantkeeper.domain.value_objects.holder import (
    ANYONE,
    AnyoneHolder,
    GroupHolder,
    GroupOrAnyone,
    Holder,
    UserHolder,
    is_anyone,
)
from grantkeeper.domain.value_objects.operation import Operation
from grantkeeper.domain.value_objects.permission import (
    GLOBAL_PERMISSIONS,
    PROJECT_PERMISSIONS,
    SYSTEM_ADMIN,
    GlobalPermission,
    ProjectPermission,
    is_global_permission,
    is_project_permission,
)
from grantkeeper.domain.value_objects.permission_snapshot import PermissionSnapshot
from grantkeeper.domain.value_objects.principal import (
    AnonymousPrincipal,
    AuthenticatedPrincipal,
    Principal,
)
from grantkeeper.domain.value_objects.scope import (
    GlobalScope,
    ProjectScope,
    Scope,
    project_uuid_of,
)

__all__ = [
    "ANYONE",
    "APPLIED",
    "GLOBAL_PERMISSIONS",
    "PERMISSION_ROOT_QUALIFIERS",
    "PROJECT_PERMISSIONS",
    "SYSTEM_ADMIN",
    "UNCHANGED",
    "AnonymousPrincipal",
    "AnyoneHolder",
    "Applied",
    "AuthenticatedPrincipal",
    "ChangeResult",
    "GlobalPermission",
    "GlobalScope",
    "GroupHolder",
    "GroupOrAnyone",
    "Holder",
    "Operation",
    "PermissionSnapshot",
    "Principal",
    "ProjectPermission",
    "ProjectScope",
    "Qualifier",
    "Rejected",
    "Scope",
    "Unchanged",
    "UserHolder",
    "is_anyone",
    "is_global_permission",
    "is_project_permission",
    "project_uuid_of",
]
