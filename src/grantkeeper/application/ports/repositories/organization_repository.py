"""Organization repository port."""

from typing import Protocol

from grantkeeper.domain.entities import Organization


class OrganizationRepository(Protocol):
    """Port for organization lookup."""

    async def get_by_key(self, key: str) -> Organization | None: ...

    async def get_by_uuid(self, uuid: str) -> Organization | None: ...

    async def get_default(self) -> Organization: ...
