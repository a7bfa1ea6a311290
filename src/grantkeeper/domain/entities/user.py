"""User entity."""

from dataclasses import dataclass


@dataclass
class User:
    """User account - login is unique, inactive users cannot sign in.

    root users administer the instance itself, above any organization.
    """

    id: int
    login: str
    name: str | None = None
    email: str | None = None
    active: bool = True
    root: bool = False
