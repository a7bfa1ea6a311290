"""Unit tests for GroupPermissionChanger."""

import pytest

from grantkeeper.application.dto.permission_change import GroupPermissionChange
from grantkeeper.application.services.group_permission_changer import GroupPermissionChanger
from grantkeeper.domain.value_objects import (
    APPLIED,
    UNCHANGED,
    AnyoneHolder,
    GlobalScope,
    GroupHolder,
    Operation,
    ProjectScope,
    Rejected,
)

from tests.conftest import (
    DEFAULT_ORG_UUID,
    FakeUnitOfWork,
    anyone_grant,
    group_grant,
)


def _change(operation, group, permission, project_uuid=None):
    return GroupPermissionChange(
        operation=operation,
        organization_uuid=DEFAULT_ORG_UUID,
        permission=permission,
        project_uuid=project_uuid,
        group=group,
    )


@pytest.mark.asyncio
async def test_add_group_permission(fake_uow: FakeUnitOfWork) -> None:
    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.ADD, GroupHolder(11), "user", "proj-1")
    )

    assert result == APPLIED
    assert group_grant(11, "user", ProjectScope("proj-1", DEFAULT_ORG_UUID)) in (
        fake_uow.grants.grants
    )


@pytest.mark.asyncio
async def test_add_existing_group_permission_is_unchanged(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(group_grant(11, "scan", GlobalScope(DEFAULT_ORG_UUID)))

    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.ADD, GroupHolder(11), "scan")
    )

    assert result == UNCHANGED


@pytest.mark.asyncio
async def test_anyone_cannot_receive_global_admin(fake_uow: FakeUnitOfWork) -> None:
    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.ADD, AnyoneHolder(), "admin")
    )

    assert result == Rejected("It is not possible to add the 'admin' permission to the group 'Anyone'")
    assert fake_uow.grants.inserted == []


@pytest.mark.asyncio
async def test_anyone_can_receive_project_admin(fake_uow: FakeUnitOfWork) -> None:
    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.ADD, AnyoneHolder(), "admin", "proj-1")
    )

    assert result == APPLIED


@pytest.mark.asyncio
async def test_remove_anyone_permission(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(anyone_grant("scan", GlobalScope(DEFAULT_ORG_UUID)))

    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, AnyoneHolder(), "scan")
    )

    assert result == APPLIED
    assert anyone_grant("scan", GlobalScope(DEFAULT_ORG_UUID)) not in fake_uow.grants.grants


@pytest.mark.asyncio
async def test_removing_last_admin_group_is_rejected(fake_uow: FakeUnitOfWork) -> None:
    """The only admin is the group's member; root loses its direct grant first."""
    fake_uow.grants.grants.clear()
    fake_uow.grants.add_grant(group_grant(10, "admin", GlobalScope(DEFAULT_ORG_UUID)))
    await fake_uow.groups.add_member(10, 1)

    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, GroupHolder(10), "admin")
    )

    assert result == Rejected("Last group with permission 'admin'. Permission cannot be removed.")


@pytest.mark.asyncio
async def test_admin_group_removable_when_user_admin_remains(fake_uow: FakeUnitOfWork) -> None:
    fake_uow.grants.add_grant(group_grant(10, "admin", GlobalScope(DEFAULT_ORG_UUID)))

    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, GroupHolder(10), "admin")
    )

    assert result == APPLIED


@pytest.mark.asyncio
async def test_remove_missing_group_permission_is_unchanged(fake_uow: FakeUnitOfWork) -> None:
    result = await GroupPermissionChanger().apply(
        fake_uow, _change(Operation.REMOVE, GroupHolder(11), "admin")
    )

    assert result == UNCHANGED


@pytest.mark.asyncio
async def test_unsupported_operation_writes_nothing(fake_uow: FakeUnitOfWork) -> None:
    with pytest.raises(ValueError, match="Unsupported permission change"):
        await GroupPermissionChanger().apply(fake_uow, _change("replace", GroupHolder(11), "scan"))

    assert fake_uow.grants.inserted == []
    assert fake_uow.grants.deleted == []
