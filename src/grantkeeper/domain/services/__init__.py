"""Domain services."""

from grantkeeper.domain.services.permission_evaluator import (
    has_global_permission,
    has_permission,
    has_project_permission,
)

__all__ = ["has_global_permission", "has_permission", "has_project_permission"]
