"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from grantkeeper.application.ports.repositories.component_repository import (
    ComponentRepository,
)
from grantkeeper.application.ports.repositories.grant_repository import GrantRepository
from grantkeeper.application.ports.repositories.group_repository import GroupRepository
from grantkeeper.application.ports.repositories.organization_repository import (
    OrganizationRepository,
)
from grantkeeper.application.ports.repositories.permission_template_repository import (
    PermissionTemplateRepository,
)
from grantkeeper.application.ports.repositories.user_repository import UserRepository


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def users(self) -> UserRepository: ...

    @property
    def groups(self) -> GroupRepository: ...

    @property
    def organizations(self) -> OrganizationRepository: ...

    @property
    def components(self) -> ComponentRepository: ...

    @property
    def grants(self) -> GrantRepository: ...

    @property
    def templates(self) -> PermissionTemplateRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    def __call__(self) -> AsyncIterator[UnitOfWork]: ...
