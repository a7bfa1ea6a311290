"""Principals - authenticated user or anonymous visitor."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedPrincipal:
    """Logged-in user."""

    user_id: int
    login: str
    root: bool = False

    @property
    def is_logged_in(self) -> bool:
        return True


@dataclass(frozen=True)
class AnonymousPrincipal:
    """Visitor without credentials. Only matches Anyone grants."""

    user_id: None = None
    login: None = None
    root: bool = False

    @property
    def is_logged_in(self) -> bool:
        return False


Principal = AuthenticatedPrincipal | AnonymousPrincipal
