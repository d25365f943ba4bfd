from uuid import uuid4

import pytest

from src.app.repositories.role_repository import RoleNameConflictError
from src.app.use_cases.roles import CreateRoleUseCase, DeleteRoleUseCase, UpdateRoleUseCase
from src.domain.entities import ErrorCode


@pytest.mark.asyncio
async def test_create_role_normalizes_actions(mock_uow, organization):
    # Arrange
    mock_uow.organizations.get_by_id.return_value = organization

    # Act
    use_case = CreateRoleUseCase(mock_uow)
    result = await use_case.execute(
        organization.id, "  Editor ", "Can edit", ["write", "read", "write"]
    )

    # Assert
    assert result.is_ok()
    assert result.value.name == "Editor"
    assert result.value.actions == ["read", "write"]
    mock_uow.roles.create.assert_called_once()
    mock_uow.audit_events.create.assert_called_once()
    assert mock_uow.audit_events.create.call_args[0][0].action == "role_created"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_role_rejects_empty_actions(mock_uow, organization):
    use_case = CreateRoleUseCase(mock_uow)
    result = await use_case.execute(organization.id, "Nobody", None, [])

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    mock_uow.roles.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_role_rejects_unknown_action(mock_uow, organization):
    use_case = CreateRoleUseCase(mock_uow)
    result = await use_case.execute(organization.id, "Hacker", None, ["read", "delete"])

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert "delete" in result.error.message


@pytest.mark.asyncio
async def test_create_role_rejects_duplicate_name(mock_uow, organization, editor_role):
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.roles.get_by_org_and_name.return_value = editor_role

    use_case = CreateRoleUseCase(mock_uow)
    result = await use_case.execute(organization.id, "Editor", None, ["read"])

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_role_in_missing_org(mock_uow):
    use_case = CreateRoleUseCase(mock_uow)
    result = await use_case.execute(uuid4(), "Editor", None, ["read"])

    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_update_role_replaces_action_set(mock_uow, editor_role):
    mock_uow.roles.get_by_id.return_value = editor_role

    use_case = UpdateRoleUseCase(mock_uow)
    result = await use_case.execute(editor_role.id, actions=["admin", "read"])

    assert result.is_ok()
    assert result.value.actions == ["read", "admin"]
    assert editor_role.actions == ["read", "admin"]
    mock_uow.roles.update.assert_called_once_with(editor_role)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_update_role_without_changes_does_not_write(mock_uow, editor_role):
    mock_uow.roles.get_by_id.return_value = editor_role

    use_case = UpdateRoleUseCase(mock_uow)
    result = await use_case.execute(editor_role.id)

    assert result.is_ok()
    mock_uow.roles.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_role_losing_name_race_is_validation_error(mock_uow, organization):
    # Arrange: the name check passes but a concurrent creation wins the index
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.roles.create.side_effect = RoleNameConflictError(organization.id, "Editor")

    # Act
    use_case = CreateRoleUseCase(mock_uow)
    result = await use_case.execute(organization.id, "Editor", None, ["read"])

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert "Editor" in result.error.message
    mock_uow.rollback.assert_called_once()
    mock_uow.audit_events.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_update_role_losing_rename_race_is_validation_error(mock_uow, editor_role):
    mock_uow.roles.get_by_id.return_value = editor_role
    mock_uow.roles.update.side_effect = RoleNameConflictError(editor_role.org_id, "Viewer")

    use_case = UpdateRoleUseCase(mock_uow)
    result = await use_case.execute(editor_role.id, name="Viewer")

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    assert "Viewer" in result.error.message
    mock_uow.rollback.assert_called_once()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_delete_role_marks_it_deleted(mock_uow, editor_role):
    # Arrange
    mock_uow.roles.get_by_id.return_value = editor_role

    # Act
    use_case = DeleteRoleUseCase(mock_uow)
    result = await use_case.execute(editor_role.id)

    # Assert
    assert result.is_ok()
    assert result.value.status == "deleted"
    assert editor_role.is_deleted
    mock_uow.roles.update.assert_called_once_with(editor_role)
    assert mock_uow.audit_events.create.call_args[0][0].action == "role_deleted"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_delete_missing_or_deleted_role(mock_uow):
    # Deleted roles are invisible to get_by_id
    use_case = DeleteRoleUseCase(mock_uow)
    result = await use_case.execute(uuid4())

    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_FOUND
    mock_uow.roles.update.assert_not_called()
