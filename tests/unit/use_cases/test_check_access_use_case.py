from uuid import uuid4

import pytest

from src.app.use_cases.permissions import (
    CheckAccessUseCase,
    CheckOrgAccessUseCase,
    GetEffectiveActionsUseCase,
)
from src.domain.entities import ErrorCode, ObjectType, PermissionAction, Workspace


@pytest.mark.asyncio
async def test_org_wide_grant_cascades_to_workspace(
    mock_uow, alice, workspace, editor_role, org_grant
):
    # Arrange
    mock_uow.workspaces.get_by_id.return_value = workspace
    mock_uow.permissions.find_grants.return_value = [org_grant]
    mock_uow.roles.get_by_ids.return_value = [editor_role]

    # Act
    use_case = CheckAccessUseCase(mock_uow)
    result = await use_case.execute(
        alice.id, ObjectType.workspace, workspace.id, PermissionAction.write
    )

    # Assert
    assert result.is_ok()
    assert result.value.granted is True
    mock_uow.permissions.find_grants.assert_called_once_with(
        alice.id, workspace.organization_id
    )
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_workspace_grant_does_not_cascade_to_sibling(
    mock_uow, alice, organization, workspace, editor_role, make_grant
):
    sibling = Workspace(id=uuid4(), organization_id=organization.id, name="ws2")
    mock_uow.workspaces.get_by_id.return_value = sibling
    mock_uow.permissions.find_grants.return_value = [
        make_grant(alice.id, editor_role, ObjectType.workspace, workspace.id)
    ]
    mock_uow.roles.get_by_ids.return_value = [editor_role]

    use_case = CheckAccessUseCase(mock_uow)
    result = await use_case.execute(
        alice.id, ObjectType.workspace, sibling.id, PermissionAction.read
    )

    assert result.is_ok()
    assert result.value.granted is False


@pytest.mark.asyncio
async def test_action_outside_role_is_denied(
    mock_uow, alice, organization, editor_role, org_grant
):
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.permissions.find_grants.return_value = [org_grant]
    mock_uow.roles.get_by_ids.return_value = [editor_role]

    use_case = CheckAccessUseCase(mock_uow)
    result = await use_case.execute(
        alice.id, ObjectType.organization, organization.id, PermissionAction.manage
    )

    assert result.is_ok()
    assert result.value.granted is False


@pytest.mark.asyncio
async def test_missing_object_is_not_found(mock_uow, alice):
    use_case = CheckAccessUseCase(mock_uow)
    result = await use_case.execute(
        alice.id, ObjectType.workspace, uuid4(), PermissionAction.read
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_effective_actions_in_vocabulary_order(
    mock_uow, alice, workspace, editor_role, org_grant
):
    mock_uow.workspaces.get_by_id.return_value = workspace
    mock_uow.permissions.find_grants.return_value = [org_grant]
    mock_uow.roles.get_by_ids.return_value = [editor_role]

    use_case = GetEffectiveActionsUseCase(mock_uow)
    result = await use_case.execute(alice.id, ObjectType.workspace, workspace.id)

    assert result.is_ok()
    assert result.value.actions == ["read", "write"]


@pytest.mark.asyncio
async def test_org_access_reflects_any_grant(mock_uow, alice, organization):
    mock_uow.permissions.has_any_grant.return_value = True

    use_case = CheckOrgAccessUseCase(mock_uow)
    result = await use_case.execute(alice.id, organization.id)

    assert result.is_ok()
    assert result.value.has_access is True
