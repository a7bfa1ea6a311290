"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from psycopg_pool import AsyncConnectionPool

from grantkeeper.infrastructure.persistence.postgres.component_repository import (
    PostgresComponentRepository,
)
from grantkeeper.infrastructure.persistence.postgres.grant_repository import (
    PostgresGrantRepository,
)
from grantkeeper.infrastructure.persistence.postgres.group_repository import (
    PostgresGroupRepository,
)
from grantkeeper.infrastructure.persistence.postgres.organization_repository import (
    PostgresOrganizationRepository,
)
from grantkeeper.infrastructure.persistence.postgres.permission_template_repository import (
    PostgresPermissionTemplateRepository,
)
from grantkeeper.infrastructure.persistence.postgres.user_repository import (
    PostgresUserRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._users = PostgresUserRepository(self._conn)
        self._groups = PostgresGroupRepository(self._conn)
        self._organizations = PostgresOrganizationRepository(self._conn)
        self._components = PostgresComponentRepository(self._conn)
        self._grants = PostgresGrantRepository(self._conn)
        self._templates = PostgresPermissionTemplateRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def users(self) -> PostgresUserRepository:
        return self._users

    @property
    def groups(self) -> PostgresGroupRepository:
        return self._groups

    @property
    def organizations(self) -> PostgresOrganizationRepository:
        return self._organizations

    @property
    def components(self) -> PostgresComponentRepository:
        return self._components

    @property
    def grants(self) -> PostgresGrantRepository:
        return self._grants

    @property
    def templates(self) -> PostgresPermissionTemplateRepository:
        return self._templates

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager)."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        uow = PostgresUnitOfWork(pool)
        async with uow:
            try:
                yield uow
                await uow.commit()
            except BaseException:
                await uow.rollback()
                raise

    return factory
