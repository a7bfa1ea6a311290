"""Permission template repository port."""

from typing import Protocol

from grantkeeper.domain.entities import PermissionTemplate, TemplateGroup
from grantkeeper.domain.value_objects import Holder


class PermissionTemplateRepository(Protocol):
    """Port for permission templates and the grants they carry."""

    async def get_by_uuid(self, uuid: str) -> PermissionTemplate | None: ...

    async def get_by_name(
        self, organization_uuid: str, name: str
    ) -> PermissionTemplate | None: ...

    async def insert(self, template: PermissionTemplate) -> None: ...

    async def delete_grant(self, template_uuid: str, holder: Holder, permission: str) -> None: ...

    async def search_groups(
        self,
        template: PermissionTemplate,
        *,
        permission: str | None = None,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[TemplateGroup]: ...

    async def count_groups(
        self,
        template: PermissionTemplate,
        *,
        permission: str | None = None,
        query: str | None = None,
    ) -> int: ...
