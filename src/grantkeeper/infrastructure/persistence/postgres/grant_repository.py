"""PostgreSQL grant repository implementation.

All holder kinds share the grants table. holder_kind tells which of
user_id / group_id is set; Anyone grants have neither.
"""

from collections import defaultdict
from datetime import UTC, datetime

from psycopg import AsyncConnection

from grantkeeper.domain.entities import Grant
from grantkeeper.domain.value_objects import (
    AnyoneHolder,
    GroupHolder,
    Holder,
    PermissionSnapshot,
    ProjectScope,
    Scope,
    UserHolder,
    project_uuid_of,
)

USER = "user"
GROUP = "group"
ANYONE = "anyone"


def _holder_columns(holder: Holder) -> tuple[str, int | None, int | None]:
    """(holder_kind, user_id, group_id) of holder."""
    if isinstance(holder, UserHolder):
        return USER, holder.user_id, None
    if isinstance(holder, GroupHolder):
        return GROUP, None, holder.group_id
    if isinstance(holder, AnyoneHolder):
        return ANYONE, None, None
    raise ValueError(f"Unsupported holder: {holder!r}")


def _holder_filter(holder: Holder) -> tuple[str, tuple]:
    kind, user_id, group_id = _holder_columns(holder)
    if kind == USER:
        return "holder_kind = 'user' AND user_id = %s", (user_id,)
    if kind == GROUP:
        return "holder_kind = 'group' AND group_id = %s", (group_id,)
    return "holder_kind = 'anyone'", ()


def _scope_filter(scope: Scope) -> tuple[str, tuple]:
    if isinstance(scope, ProjectScope):
        return "project_uuid = %s", (scope.project_uuid,)
    return "project_uuid IS NULL", ()


class PostgresGrantRepository:
    """Grant repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def lock_organization(self, organization_uuid: str) -> None:
        """Serialize grant changes of the organization until the transaction ends."""
        await self._conn.execute(
            "SELECT pg_advisory_xact_lock(hashtextextended(%s, 0))",
            (f"grants:{organization_uuid}",),
        )

    async def select_permissions(
        self, organization_uuid: str, holder: Holder, scope: Scope
    ) -> set[str]:
        """Permissions held by holder in scope, without group or Anyone inheritance."""
        holder_sql, holder_params = _holder_filter(holder)
        scope_sql, scope_params = _scope_filter(scope)
        cur = await self._conn.execute(
            "SELECT permission FROM grants "
            f"WHERE organization_uuid = %s AND {holder_sql} AND {scope_sql}",
            (organization_uuid, *holder_params, *scope_params),
        )
        rows = await cur.fetchall()
        return {r[0] for r in rows}

    async def insert(self, grant: Grant) -> None:
        kind, user_id, group_id = _holder_columns(grant.holder)
        await self._conn.execute(
            "INSERT INTO grants "
            "(organization_uuid, holder_kind, user_id, group_id, project_uuid, permission, created_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                grant.organization_uuid,
                kind,
                user_id,
                group_id,
                project_uuid_of(grant.scope),
                grant.permission,
                datetime.now(UTC),
            ),
        )

    async def delete(self, grant: Grant) -> None:
        holder_sql, holder_params = _holder_filter(grant.holder)
        scope_sql, scope_params = _scope_filter(grant.scope)
        await self._conn.execute(
            "DELETE FROM grants "
            f"WHERE organization_uuid = %s AND {holder_sql} AND {scope_sql} AND permission = %s",
            (grant.organization_uuid, *holder_params, *scope_params, grant.permission),
        )

    async def count_global_admins(
        self,
        organization_uuid: str,
        permission: str,
        *,
        excluding_user_id: int | None = None,
        excluding_group_id: int | None = None,
    ) -> int:
        """Active users holding permission globally, directly or through a group.

        excluding_user_id ignores that user's direct grant (the user still counts
        through its groups); excluding_group_id ignores that group's grant.
        Anyone grants never count.
        """
        cur = await self._conn.execute(
            "SELECT count(*) FROM users u WHERE u.active AND ("
            " EXISTS (SELECT 1 FROM grants g"
            "  WHERE g.organization_uuid = %(org)s AND g.holder_kind = 'user'"
            "  AND g.user_id = u.id AND g.project_uuid IS NULL AND g.permission = %(perm)s"
            "  AND g.user_id IS DISTINCT FROM %(excluded_user)s)"
            " OR EXISTS (SELECT 1 FROM grants g"
            "  JOIN groups_users gu ON gu.group_id = g.group_id"
            "  WHERE g.organization_uuid = %(org)s AND g.holder_kind = 'group'"
            "  AND gu.user_id = u.id AND g.project_uuid IS NULL AND g.permission = %(perm)s"
            "  AND g.group_id IS DISTINCT FROM %(excluded_group)s)"
            ")",
            {
                "org": organization_uuid,
                "perm": permission,
                "excluded_user": excluding_user_id,
                "excluded_group": excluding_group_id,
            },
        )
        r = await cur.fetchone()
        return r[0]

    async def load_snapshot(self, user_id: int | None) -> PermissionSnapshot:
        """Effective permissions of a user, or of an anonymous visitor when user_id is None."""
        if user_id is None:
            cur = await self._conn.execute(
                "SELECT organization_uuid, project_uuid, permission FROM grants "
                "WHERE holder_kind = 'anyone'"
            )
        else:
            cur = await self._conn.execute(
                "SELECT organization_uuid, project_uuid, permission FROM grants "
                "WHERE holder_kind = 'anyone' "
                "OR (holder_kind = 'user' AND user_id = %(user_id)s) "
                "OR (holder_kind = 'group' AND group_id IN "
                "(SELECT group_id FROM groups_users WHERE user_id = %(user_id)s))",
                {"user_id": user_id},
            )
        rows = await cur.fetchall()

        global_permissions: dict[str, set[str]] = defaultdict(set)
        project_permissions: dict[str, set[str]] = defaultdict(set)
        for organization_uuid, project_uuid, permission in rows:
            if project_uuid is None:
                global_permissions[organization_uuid].add(permission)
            else:
                project_permissions[project_uuid].add(permission)
        return PermissionSnapshot(
            global_permissions={k: frozenset(v) for k, v in global_permissions.items()},
            project_permissions={k: frozenset(v) for k, v in project_permissions.items()},
        )
