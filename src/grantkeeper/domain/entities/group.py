"""Group entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Group:
    """Group of users within an organization."""

    id: int
    organization_uuid: str
    name: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class GroupWithMembersCount:
    """Group row returned by search, with its number of members."""

    group: Group
    members_count: int
