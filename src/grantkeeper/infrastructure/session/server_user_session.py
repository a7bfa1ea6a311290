"""User session backed by the grant store."""

from grantkeeper.domain.entities import User
from grantkeeper.domain.exceptions import PermissionDenied, Unauthorized
from grantkeeper.domain.services import has_global_permission, has_project_permission
from grantkeeper.domain.value_objects import (
    SYSTEM_ADMIN,
    AnonymousPrincipal,
    AuthenticatedPrincipal,
    GlobalScope,
    PermissionSnapshot,
    Principal,
    ProjectPermission,
    ProjectScope,
    Scope,
)

INSUFFICIENT_PRIVILEGES = "Insufficient privileges"


class ServerUserSession:
    """Session of one request.

    Grants are read once, on the first permission check, and the resulting
    snapshot is used for the rest of the request.
    """

    def __init__(self, unit_of_work_factory: type, user: User | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._principal: Principal = (
            AuthenticatedPrincipal(user_id=user.id, login=user.login, root=user.root)
            if user is not None
            else AnonymousPrincipal()
        )
        self._snapshot: PermissionSnapshot | None = None
        self._default_organization_uuid: str | None = None
        self._project_scopes: dict[str, ProjectScope | None] = {}

    @classmethod
    def for_user(cls, unit_of_work_factory: type, user: User) -> "ServerUserSession":
        if user is None:
            raise ValueError("user is required")
        return cls(unit_of_work_factory, user)

    @classmethod
    def for_anonymous(cls, unit_of_work_factory: type) -> "ServerUserSession":
        return cls(unit_of_work_factory, None)

    @property
    def principal(self) -> Principal:
        return self._principal

    @property
    def login(self) -> str | None:
        return self._principal.login

    @property
    def user_id(self) -> int | None:
        return self._principal.user_id

    def is_logged_in(self) -> bool:
        return self._principal.is_logged_in

    def is_root(self) -> bool:
        return self._principal.root

    async def has_permission(
        self, permission: str, organization_uuid: str | None = None
    ) -> bool:
        """Global permission in organization (default organization when omitted)."""
        snapshot = await self._load()
        return has_global_permission(
            snapshot, permission, organization_uuid or self._default_organization_uuid
        )

    async def has_project_permission(self, permission: str, project_uuid: str) -> bool:
        snapshot = await self._load()
        return has_project_permission(
            snapshot, permission, await self._resolve_project(project_uuid)
        )

    async def has_component_permission(self, permission: str, component_key: str) -> bool:
        """Permission on the project owning the component referenced by key."""
        async with self._uow_factory() as uow:
            component = await uow.components.get_by_key(component_key)
        if component is None:
            return False
        return await self.has_project_permission(permission, component.project_uuid)

    async def has_component_uuid_permission(
        self, permission: str, component_uuid: str
    ) -> bool:
        async with self._uow_factory() as uow:
            component = await uow.components.get_by_uuid(component_uuid)
        if component is None:
            return False
        return await self.has_project_permission(permission, component.project_uuid)

    def check_logged_in(self) -> None:
        if not self.is_logged_in():
            raise Unauthorized("Authentication is required")

    def check_is_root(self) -> None:
        if not self.is_root():
            raise PermissionDenied(INSUFFICIENT_PRIVILEGES)

    async def check_permission(
        self, permission: str, organization_uuid: str | None = None
    ) -> None:
        if not await self.has_permission(permission, organization_uuid):
            raise PermissionDenied(INSUFFICIENT_PRIVILEGES)

    async def check_project_permission(self, permission: str, project_uuid: str) -> None:
        if not await self.has_project_permission(permission, project_uuid):
            raise PermissionDenied(INSUFFICIENT_PRIVILEGES)

    async def check_component_permission(self, permission: str, component_key: str) -> None:
        if not await self.has_component_permission(permission, component_key):
            raise PermissionDenied(INSUFFICIENT_PRIVILEGES)

    async def check_component_uuid_permission(
        self, permission: str, component_uuid: str
    ) -> None:
        if not await self.has_component_uuid_permission(permission, component_uuid):
            raise PermissionDenied(INSUFFICIENT_PRIVILEGES)

    async def check_scope_admin(self, scope: Scope) -> None:
        """Global admin of the organization, or admin of the project."""
        if isinstance(scope, GlobalScope):
            await self.check_permission(SYSTEM_ADMIN, scope.organization_uuid)
            return
        snapshot = await self._load()
        if not has_project_permission(snapshot, ProjectPermission.ADMIN.value, scope):
            raise PermissionDenied(INSUFFICIENT_PRIVILEGES)

    async def _load(self) -> PermissionSnapshot:
        if self._snapshot is None:
            async with self._uow_factory() as uow:
                organization = await uow.organizations.get_default()
                self._snapshot = await uow.grants.load_snapshot(self._principal.user_id)
            self._default_organization_uuid = organization.uuid
        return self._snapshot

    async def _resolve_project(self, project_uuid: str) -> ProjectScope | None:
        """Project scope of a project uuid, None when it is not a real project."""
        if project_uuid not in self._project_scopes:
            async with self._uow_factory() as uow:
                project = await uow.components.get_by_uuid(project_uuid)
            self._project_scopes[project_uuid] = (
                ProjectScope(project.uuid, project.organization_uuid)
                if project is not None and project.is_permission_root
                else None
            )
        return self._project_scopes[project_uuid]
