"""Grant holders - user, group or the Anyone pseudo-group."""

from dataclasses import dataclass

ANYONE = "Anyone"


def is_anyone(name: str) -> bool:
    """Group names are matched against Anyone case-insensitively."""
    return name.lower() == ANYONE.lower()


@dataclass(frozen=True)
class UserHolder:
    """Grant held directly by a user."""

    user_id: int
    login: str


@dataclass(frozen=True)
class GroupHolder:
    """Grant held by a real group; every member inherits it."""

    group_id: int


@dataclass(frozen=True)
class AnyoneHolder:
    """Grant held by every principal of the organization, anonymous included."""


Holder = UserHolder | GroupHolder | AnyoneHolder
GroupOrAnyone = GroupHolder | AnyoneHolder
