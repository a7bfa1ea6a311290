"""Unit tests for UserPermissionChanger."""

import pytest

from grantkeeper.application.dto.permission_change import UserPermissionChange
from grantkeeper.application.services.user_permission_changer import UserPermissionChanger
from grantkeeper.domain.entities import User
from grantkeeper.domain.value_objects import (
    APPLIED,
    UNCHANGED,
    GlobalScope,
    Operation,
    ProjectScope,
    Rejected,
    UserHolder,
)

from tests.conftest import (
    DEFAULT_ORG_UUID,
    FakeUnitOfWork,
    group_grant,
    user_grant,
)

ALICE = UserHolder(2, "alice")
ROOT = UserHolder(1, "root")


def _change(operation, user, permission, project_uuid=None):
    return UserPermissionChange(
        operation=operation,
        organization_uuid=DEFAULT_ORG_UUID,
        permission=permission,
        project_uuid=project_uuid,
        user=user,
    )


@pytest.mark.asyncio
async def test_add_inserts_grant_and_locks_organization(fake_uow: FakeUnitOfWork) -> None:
    result = await UserPermissionChanger().apply(fake_uow, _change(Operation.ADD, ALICE, "scan"))

    assert result == APPLIED
    assert fake_uow.grants.locked == [DEFAULT_ORG_UUID]
    assert user_grant(2, "alice", "scan", GlobalScope(DEFAULT_ORG_UUID)) in fake_uow.grants.grants


@pytest.mark.asyncio
async def test_add_existing_grant_is_unchanged(fake_uow: FakeUnitOfWork) -> None:
    changer = UserPermissionChanger()
    await changer.apply(fake_uow, _change(Operation.ADD, ALICE, "user", "proj-1"))

    result = await changer.apply(fake_uow, _change(Operation.ADD, ALICE, "user", "proj-1"))

    assert result == UNCHANGED
    assert len(fake_uow.grants.inserted) == 1


@pytest.mark.asyncio
async def test_remove_missing_grant_is_unchanged(fake_uow: FakeUnitOfWork) -> None:
    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ALICE, "scan")
    )

    assert result == UNCHANGED
    assert fake_uow.grants.deleted == []


@pytest.mark.asyncio
async def test_remove_project_grant(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(
        user_grant(2, "alice", "codeviewer", ProjectScope("proj-1", DEFAULT_ORG_UUID))
    )

    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ALICE, "codeviewer", "proj-1")
    )

    assert result == APPLIED
    assert await fake_uow.grants.select_permissions(
        DEFAULT_ORG_UUID, ALICE, ProjectScope("proj-1", DEFAULT_ORG_UUID)
    ) == set()


@pytest.mark.asyncio
async def test_removing_last_admin_is_rejected(fake_uow: FakeUnitOfWork) -> None:
    """root is the only administrator of the default organization."""
    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ROOT, "admin")
    )

    assert isinstance(result, Rejected)
    assert result.reason == "Last user with 'admin' permission. Permission cannot be removed."
    assert fake_uow.grants.deleted == []


@pytest.mark.asyncio
async def test_admin_can_be_removed_when_another_admin_exists(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(user_grant(2, "alice", "admin", GlobalScope(DEFAULT_ORG_UUID)))

    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ROOT, "admin")
    )

    assert result == APPLIED


@pytest.mark.asyncio
async def test_admin_through_group_counts_as_remaining_admin(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(group_grant(10, "admin", GlobalScope(DEFAULT_ORG_UUID)))
    await fake_uow.groups.add_member(10, 3)

    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ROOT, "admin")
    )

    assert result == APPLIED


@pytest.mark.asyncio
async def test_group_membership_of_removed_user_does_not_count(fake_uow: FakeUnitOfWork) -> None:
    """root keeps admin through a group, so removing the direct grant is allowed."""
    fake_uow.grants.add_grant(group_grant(10, "admin", GlobalScope(DEFAULT_ORG_UUID)))
    await fake_uow.groups.add_member(10, 1)

    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ROOT, "admin")
    )

    assert result == APPLIED


@pytest.mark.asyncio
async def test_inactive_admin_does_not_count(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(user_grant(4, "ghost", "admin", GlobalScope(DEFAULT_ORG_UUID)))

    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ROOT, "admin")
    )

    assert isinstance(result, Rejected)


@pytest.mark.asyncio
async def test_project_admin_removal_is_not_guarded(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(
        user_grant(2, "alice", "admin", ProjectScope("proj-1", DEFAULT_ORG_UUID))
    )

    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, ALICE, "admin", "proj-1")
    )

    assert result == APPLIED


@pytest.mark.asyncio
async def test_add_then_remove_restores_grants(fake_uow: FakeUnitOfWork) -> None:
    before = set(fake_uow.grants.grants)
    changer = UserPermissionChanger()

    await changer.apply(fake_uow, _change(Operation.ADD, ALICE, "provisioning"))
    await changer.apply(fake_uow, _change(Operation.REMOVE, ALICE, "provisioning"))

    assert fake_uow.grants.grants == before


@pytest.mark.asyncio
async def test_inactive_user_grant_is_removable(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.users.add_user(User(id=5, login="former", active=False))
    fake_uow.grants.add_grant(user_grant(5, "former", "scan", GlobalScope(DEFAULT_ORG_UUID)))

    result = await UserPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, UserHolder(5, "former"), "scan")
    )

    assert result == APPLIED


@pytest.mark.asyncio
async def test_unsupported_operation_writes_nothing(fake_uow: FakeUnitOfWork) -> None:
    with pytest.raises(ValueError, match="Unsupported permission change"):
        await UserPermissionChanger().apply(fake_uow, _change("replace", ALICE, "scan"))

    assert fake_uow.grants.inserted == []
    assert fake_uow.grants.deleted == []
