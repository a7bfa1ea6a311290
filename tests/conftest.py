"""Pytest fixtures for GrantKeeper tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import pytest

from grantkeeper.domain.entities import (
    Component,
    Grant,
    Group,
    GroupWithMembersCount,
    Organization,
    PermissionTemplate,
    TemplateGroup,
    User,
)
from grantkeeper.domain.value_objects import (
    ANYONE,
    AnyoneHolder,
    GlobalScope,
    GroupHolder,
    Holder,
    PermissionSnapshot,
    ProjectScope,
    Qualifier,
    Scope,
    UserHolder,
)

DEFAULT_ORG_UUID = "org-default"
OTHER_ORG_UUID = "org-other"


# --- Fake repositories ---


class FakeUserRepository:
    """In-memory user repository."""

    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}

    async def get_by_login(self, login: str) -> User | None:
        for user in self._by_id.values():
            if user.login == login:
                return user
        return None

    async def set_root(self, login: str, root: bool) -> bool:
        user = await self.get_by_login(login)
        if user is None or user.root == root:
            return False
        user.root = root
        return True

    def add_user(self, user: User) -> User:
        self._by_id[user.id] = user
        return user


class FakeOrganizationRepository:
    """In-memory organization repository. The first added organization is the default."""

    def __init__(self) -> None:
        self._by_uuid: dict[str, Organization] = {}
        self.default_uuid: str | None = None

    async def get_by_key(self, key: str) -> Organization | None:
        for organization in self._by_uuid.values():
            if organization.key == key:
                return organization
        return None

    async def get_by_uuid(self, uuid: str) -> Organization | None:
        return self._by_uuid.get(uuid)

    async def get_default(self) -> Organization:
        if self.default_uuid is None:
            raise RuntimeError("Default organization is not defined")
        return self._by_uuid[self.default_uuid]

    def add_organization(self, organization: Organization) -> Organization:
        self._by_uuid[organization.uuid] = organization
        if self.default_uuid is None:
            self.default_uuid = organization.uuid
        return organization


class FakeComponentRepository:
    """In-memory component repository. Project search reads the fake grants."""

    def __init__(self, grants: FakeGrantRepository, groups: FakeGroupRepository) -> None:
        self._grants = grants
        self._groups = groups
        self._by_uuid: dict[str, Component] = {}

    async def get_by_uuid(self, uuid: str) -> Component | None:
        return self._by_uuid.get(uuid)

    async def get_by_key(self, key: str) -> Component | None:
        for component in self._by_uuid.values():
            if component.key == key:
                return component
        return None

    def _projects_with_permission(
        self, user_id: int, permission: str, query: str | None
    ) -> list[Component]:
        group_ids = self._groups.groups_of(user_id)
        project_uuids = {
            g.scope.project_uuid
            for g in self._grants.grants
            if isinstance(g.scope, ProjectScope)
            and g.permission == permission
            and (
                (isinstance(g.holder, UserHolder) and g.holder.user_id == user_id)
                or (isinstance(g.holder, GroupHolder) and g.holder.group_id in group_ids)
            )
        }
        items = [
            c
            for c in self._by_uuid.values()
            if c.uuid in project_uuids
            and c.qualifier == Qualifier.PROJECT.value
            and c.project_uuid == c.uuid
            and (not query or query.lower() in c.name.lower() or c.key == query)
        ]
        items.sort(key=lambda c: (c.name.lower(), c.uuid))
        return items

    async def search_projects_with_permission(
        self,
        user_id: int,
        permission: str,
        *,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Component]:
        return self._projects_with_permission(user_id, permission, query)[offset : offset + limit]

    async def count_projects_with_permission(
        self, user_id: int, permission: str, *, query: str | None = None
    ) -> int:
        return len(self._projects_with_permission(user_id, permission, query))

    def add_component(self, component: Component) -> Component:
        self._by_uuid[component.uuid] = component
        return component


class FakeGroupRepository:
    """In-memory group repository with group memberships."""

    def __init__(self) -> None:
        self._by_id: dict[int, Group] = {}
        self.members: dict[int, set[int]] = {}  # group_id -> {user_id}

    async def get_by_id(self, group_id: int) -> Group | None:
        return self._by_id.get(group_id)

    async def get_by_name(self, organization_uuid: str, name: str) -> Group | None:
        for group in self._by_id.values():
            if group.organization_uuid == organization_uuid and group.name == name:
                return group
        return None

    async def is_member(self, group_id: int, user_id: int) -> bool:
        return user_id in self.members.get(group_id, set())

    async def add_member(self, group_id: int, user_id: int) -> None:
        self.members.setdefault(group_id, set()).add(user_id)

    def _matching(self, organization_uuid: str, query: str | None) -> list[Group]:
        items = [
            g
            for g in self._by_id.values()
            if g.organization_uuid == organization_uuid
            and (not query or query.lower() in g.name.lower())
        ]
        items.sort(key=lambda g: (g.name.lower(), g.id))
        return items

    async def search(
        self,
        organization_uuid: str,
        *,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[GroupWithMembersCount]:
        page = self._matching(organization_uuid, query)[offset : offset + limit]
        return [
            GroupWithMembersCount(group=g, members_count=len(self.members.get(g.id, set())))
            for g in page
        ]

    async def count(self, organization_uuid: str, *, query: str | None = None) -> int:
        return len(self._matching(organization_uuid, query))

    def add_group(self, group: Group) -> Group:
        self._by_id[group.id] = group
        return group

    def groups_of(self, user_id: int) -> set[int]:
        return {gid for gid, users in self.members.items() if user_id in users}


class FakeGrantRepository:
    """In-memory grant set. Admin counting follows the SQL implementation."""

    def __init__(self, users: FakeUserRepository, groups: FakeGroupRepository) -> None:
        self._users = users
        self._groups = groups
        self.grants: set[Grant] = set()
        self.locked: list[str] = []
        self.inserted: list[Grant] = []
        self.deleted: list[Grant] = []

    async def lock_organization(self, organization_uuid: str) -> None:
        self.locked.append(organization_uuid)

    async def select_permissions(
        self, organization_uuid: str, holder: Holder, scope: Scope
    ) -> set[str]:
        return {
            g.permission
            for g in self.grants
            if g.organization_uuid == organization_uuid and g.holder == holder and g.scope == scope
        }

    async def insert(self, grant: Grant) -> None:
        self.grants.add(grant)
        self.inserted.append(grant)

    async def delete(self, grant: Grant) -> None:
        self.grants.discard(grant)
        self.deleted.append(grant)

    async def count_global_admins(
        self,
        organization_uuid: str,
        permission: str,
        *,
        excluding_user_id: int | None = None,
        excluding_group_id: int | None = None,
    ) -> int:
        admins: set[int] = set()
        for grant in self.grants:
            if grant.organization_uuid != organization_uuid or grant.permission != permission:
                continue
            if not isinstance(grant.scope, GlobalScope):
                continue
            if isinstance(grant.holder, UserHolder):
                if grant.holder.user_id != excluding_user_id:
                    admins.add(grant.holder.user_id)
            elif isinstance(grant.holder, GroupHolder):
                if grant.holder.group_id != excluding_group_id:
                    admins.update(self._groups.members.get(grant.holder.group_id, set()))
        active = [self._users._by_id.get(user_id) for user_id in admins]
        return sum(1 for user in active if user is not None and user.active)

    async def load_snapshot(self, user_id: int | None) -> PermissionSnapshot:
        group_ids = self._groups.groups_of(user_id) if user_id is not None else set()
        global_permissions: dict[str, set[str]] = {}
        project_permissions: dict[str, set[str]] = {}
        for grant in self.grants:
            holder = grant.holder
            held = (
                isinstance(holder, AnyoneHolder)
                or (isinstance(holder, UserHolder) and holder.user_id == user_id)
                or (isinstance(holder, GroupHolder) and holder.group_id in group_ids)
            )
            if not held:
                continue
            if isinstance(grant.scope, ProjectScope):
                project_permissions.setdefault(grant.scope.project_uuid, set()).add(
                    grant.permission
                )
            else:
                global_permissions.setdefault(grant.organization_uuid, set()).add(
                    grant.permission
                )
        return PermissionSnapshot(
            global_permissions={k: frozenset(v) for k, v in global_permissions.items()},
            project_permissions={k: frozenset(v) for k, v in project_permissions.items()},
        )

    def add_grant(self, grant: Grant) -> Grant:
        self.grants.add(grant)
        return grant


class FakePermissionTemplateRepository:
    """In-memory templates. grants holds (template_uuid, holder, permission) triples."""

    def __init__(self, groups: FakeGroupRepository) -> None:
        self._groups = groups
        self._by_uuid: dict[str, PermissionTemplate] = {}
        self.grants: set[tuple[str, Holder, str]] = set()

    async def get_by_uuid(self, uuid: str) -> PermissionTemplate | None:
        return self._by_uuid.get(uuid)

    async def get_by_name(
        self, organization_uuid: str, name: str
    ) -> PermissionTemplate | None:
        for template in self._by_uuid.values():
            if (
                template.organization_uuid == organization_uuid
                and template.name.lower() == name.lower()
            ):
                return template
        return None

    async def insert(self, template: PermissionTemplate) -> None:
        self._by_uuid[template.uuid] = template

    async def delete_grant(self, template_uuid: str, holder: Holder, permission: str) -> None:
        self.grants.discard((template_uuid, holder, permission))

    def _matching(
        self, template: PermissionTemplate, permission: str | None, query: str | None
    ) -> list[TemplateGroup]:
        candidates = [TemplateGroup(holder=AnyoneHolder(), name=ANYONE)] + [
            TemplateGroup(holder=GroupHolder(g.id), name=g.name, description=g.description)
            for g in sorted(self._groups._by_id.values(), key=lambda g: (g.name.lower(), g.id))
            if g.organization_uuid == template.organization_uuid
        ]
        items = []
        for candidate in candidates:
            candidate.permissions = sorted(
                p
                for uuid, holder, p in self.grants
                if uuid == template.uuid and holder == candidate.holder
            )
            if query and query.lower() not in candidate.name.lower():
                continue
            if permission and permission not in candidate.permissions:
                continue
            if not query and not permission and not candidate.permissions:
                continue
            items.append(candidate)
        return items

    async def search_groups(
        self,
        template: PermissionTemplate,
        *,
        permission: str | None = None,
        query: str | None = None,
        offset: int = 0,
        limit: int = 100,
    ) -> list[TemplateGroup]:
        return self._matching(template, permission, query)[offset : offset + limit]

    async def count_groups(
        self,
        template: PermissionTemplate,
        *,
        permission: str | None = None,
        query: str | None = None,
    ) -> int:
        return len(self._matching(template, permission, query))

    def add_template(self, template: PermissionTemplate) -> PermissionTemplate:
        self._by_uuid[template.uuid] = template
        return template

    def add_template_grant(self, template_uuid: str, holder: Holder, permission: str) -> None:
        self.grants.add((template_uuid, holder, permission))


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.users = FakeUserRepository()
        self.organizations = FakeOrganizationRepository()
        self.groups = FakeGroupRepository()
        self.grants = FakeGrantRepository(self.users, self.groups)
        self.components = FakeComponentRepository(self.grants, self.groups)
        self.templates = FakePermissionTemplateRepository(self.groups)
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same FakeUnitOfWork, committing or rolling back like Postgres."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        try:
            yield uow
            await uow.commit()
        except Exception:
            await uow.rollback()
            raise

    return _factory


# --- Sample data ---


def seed(uow: FakeUnitOfWork) -> FakeUnitOfWork:
    """Two organizations, a few users, groups and projects.

    Users: 1 root (root, global admin), 2 alice, 3 bob, 4 ghost (inactive).
    Groups: 10 sonar-admins (default org), 11 devs (default org), 20 ops (other org).
    Components: proj-1 (project), view-1 (view), proj-1:src (directory), proj-2 (other org).
    """
    uow.organizations.add_organization(
        Organization(uuid=DEFAULT_ORG_UUID, key="default-organization", name="Default")
    )
    uow.organizations.add_organization(Organization(uuid=OTHER_ORG_UUID, key="other", name="Other"))

    uow.users.add_user(User(id=1, login="root", name="Administrator", root=True))
    uow.users.add_user(User(id=2, login="alice", name="Alice"))
    uow.users.add_user(User(id=3, login="bob", name="Bob"))
    uow.users.add_user(User(id=4, login="ghost", active=False))

    uow.groups.add_group(Group(id=10, organization_uuid=DEFAULT_ORG_UUID, name="sonar-admins"))
    uow.groups.add_group(
        Group(id=11, organization_uuid=DEFAULT_ORG_UUID, name="devs", description="Developers")
    )
    uow.groups.add_group(Group(id=20, organization_uuid=OTHER_ORG_UUID, name="ops"))

    uow.components.add_component(
        Component(
            uuid="proj-1",
            key="project-one",
            name="Project One",
            qualifier=Qualifier.PROJECT.value,
            project_uuid="proj-1",
            organization_uuid=DEFAULT_ORG_UUID,
        )
    )
    uow.components.add_component(
        Component(
            uuid="view-1",
            key="portfolio",
            name="Portfolio",
            qualifier=Qualifier.VIEW.value,
            project_uuid="view-1",
            organization_uuid=DEFAULT_ORG_UUID,
        )
    )
    uow.components.add_component(
        Component(
            uuid="dir-1",
            key="project-one:src",
            name="src",
            qualifier=Qualifier.DIRECTORY.value,
            project_uuid="proj-1",
            organization_uuid=DEFAULT_ORG_UUID,
        )
    )
    uow.components.add_component(
        Component(
            uuid="proj-2",
            key="project-two",
            name="Project Two",
            qualifier=Qualifier.PROJECT.value,
            project_uuid="proj-2",
            organization_uuid=OTHER_ORG_UUID,
        )
    )

    uow.grants.add_grant(
        Grant(
            organization_uuid=DEFAULT_ORG_UUID,
            holder=UserHolder(1, "root"),
            permission="admin",
            scope=GlobalScope(DEFAULT_ORG_UUID),
        )
    )
    return uow


def user_grant(user_id: int, login: str, permission: str, scope: Scope) -> Grant:
    return Grant(
        organization_uuid=scope.organization_uuid,
        holder=UserHolder(user_id, login),
        permission=permission,
        scope=scope,
    )


def group_grant(group_id: int, permission: str, scope: Scope) -> Grant:
    return Grant(
        organization_uuid=scope.organization_uuid,
        holder=GroupHolder(group_id),
        permission=permission,
        scope=scope,
    )


def anyone_grant(permission: str, scope: Scope) -> Grant:
    return Grant(
        organization_uuid=scope.organization_uuid,
        holder=AnyoneHolder(),
        permission=permission,
        scope=scope,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Seeded in-memory UnitOfWork, shared by every unit of work of the test."""
    return seed(FakeUnitOfWork())


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager with the test's FakeUnitOfWork."""
    return make_uow_factory(fake_uow)


@pytest.fixture
def admin_session():
    """AsyncMock session of a logged-in administrator - every check passes."""
    from unittest.mock import AsyncMock, MagicMock

    session = AsyncMock()
    session.login = "root"
    session.user_id = 1
    session.is_logged_in = MagicMock(return_value=True)
    session.check_logged_in = MagicMock(return_value=None)
    session.check_scope_admin.return_value = None
    return session
