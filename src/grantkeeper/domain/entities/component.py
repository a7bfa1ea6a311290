"""Component entity - project, view, module, directory or file."""

from dataclasses import dataclass

from grantkeeper.domain.value_objects import PERMISSION_ROOT_QUALIFIERS


@dataclass
class Component:
    """Component of a project tree. project_uuid points to the owning project."""

    uuid: str
    key: str
    name: str
    qualifier: str
    project_uuid: str
    organization_uuid: str

    @property
    def is_permission_root(self) -> bool:
        """True for projects and views - the only components carrying grants."""
        return self.qualifier in PERMISSION_ROOT_QUALIFIERS and self.project_uuid == self.uuid
