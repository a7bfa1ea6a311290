"""Organization entity."""

from dataclasses import dataclass


@dataclass
class Organization:
    """Organization - owns groups, projects and global grants."""

    uuid: str
    key: str
    name: str
