"""User session port - who is calling and what they may do."""

from typing import Protocol

from grantkeeper.domain.value_objects import Scope


class UserSession(Protocol):
    """Request-scoped view of the caller's identity and permissions."""

    @property
    def login(self) -> str | None: ...

    @property
    def user_id(self) -> int | None: ...

    def is_logged_in(self) -> bool: ...

    def is_root(self) -> bool: ...

    async def has_permission(
        self, permission: str, organization_uuid: str | None = None
    ) -> bool: ...

    async def has_project_permission(self, permission: str, project_uuid: str) -> bool: ...

    async def has_component_permission(self, permission: str, component_key: str) -> bool: ...

    async def has_component_uuid_permission(
        self, permission: str, component_uuid: str
    ) -> bool: ...

    def check_logged_in(self) -> None: ...

    def check_is_root(self) -> None: ...

    async def check_permission(
        self, permission: str, organization_uuid: str | None = None
    ) -> None: ...

    async def check_project_permission(self, permission: str, project_uuid: str) -> None: ...

    async def check_component_permission(self, permission: str, component_key: str) -> None: ...

    async def check_component_uuid_permission(
        self, permission: str, component_uuid: str
    ) -> None: ...

    async def check_scope_admin(self, scope: Scope) -> None: ...
