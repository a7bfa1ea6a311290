"""Grant repository port - the persisted set of grants."""

from typing import Protocol

from grantkeeper.domain.entities import Grant
from grantkeeper.domain.value_objects import Holder, PermissionSnapshot, Scope


class GrantRepository(Protocol):
    """Port for grant persistence. All calls run in the caller's transaction."""

    async def lock_organization(self, organization_uuid: str) -> None: ...

    async def select_permissions(
        self, organization_uuid: str, holder: Holder, scope: Scope
    ) -> set[str]: ...

    async def insert(self, grant: Grant) -> None: ...

    async def delete(self, grant: Grant) -> None: ...

    async def count_global_admins(
        self,
        organization_uuid: str,
        permission: str,
        *,
        excluding_user_id: int | None = None,
        excluding_group_id: int | None = None,
    ) -> int: ...

    async def load_snapshot(self, user_id: int | None) -> PermissionSnapshot: ...
