"""Group repository port."""

from typing import Protocol

from grantkeeper.domain.entities import Group, GroupWithMembersCount


class GroupRepository(Protocol):
    """Port for groups and their memberships."""

    async def get_by_id(self, group_id: int) -> Group | None: ...

    async def get_by_name(self, organization_uuid: str, name: str) -> Group | None: ...

    async def is_member(self, group_id: int, user_id: int) -> bool: ...

    async def add_member(self, group_id: int, user_id: int) -> None: ...

    async def search(
        self,
        organization_uuid: str,
        *,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[GroupWithMembersCount]: ...

    async def count(self, organization_uuid: str, *, query: str | None = None) -> int: ...
