"""Component repository port."""

from typing import Protocol

from grantkeeper.domain.entities import Component


class ComponentRepository(Protocol):
    """Port for component lookup by uuid or key, and projects a user holds a permission on."""

    async def get_by_uuid(self, uuid: str) -> Component | None: ...

    async def get_by_key(self, key: str) -> Component | None: ...

    async def search_projects_with_permission(
        self,
        user_id: int,
        permission: str,
        *,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Component]: ...

    async def count_projects_with_permission(
        self, user_id: int, permission: str, *, query: str | None = None
    ) -> int: ...
