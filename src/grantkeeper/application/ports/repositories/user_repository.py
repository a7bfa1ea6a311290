"""User repository port."""

from typing import Protocol

from grantkeeper.domain.entities import User


class UserRepository(Protocol):
    """Port for user lookup and the root flag."""

    async def get_by_login(self, login: str) -> User | None: ...

    async def set_root(self, login: str, root: bool) -> bool: ...
