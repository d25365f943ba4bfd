from datetime import timedelta
from unittest.mock import call
from uuid import uuid4

import pytest

from src.app.use_cases.invitations import CreateInvitationUseCase, WorkspaceRoleGrant
from src.domain.entities import ErrorCode, InvitationStatus, Role, Workspace


@pytest.fixture
def org_in_store(mock_uow, organization, editor_role, workspace):
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.roles.get_by_id.return_value = editor_role
    mock_uow.workspaces.get_by_ids.return_value = [workspace]
    mock_uow.roles.get_by_ids.return_value = [editor_role]
    return organization


@pytest.mark.asyncio
async def test_create_invitation(mock_uow, clock, org_in_store, editor_role, workspace):
    # Arrange
    inviter_id = uuid4()
    grants = [WorkspaceRoleGrant(workspace_id=workspace.id, role_id=editor_role.id)]

    # Act
    use_case = CreateInvitationUseCase(mock_uow, clock=clock)
    result = await use_case.execute(
        org_in_store.id, editor_role.id, inviter_id, "Alice@X.com", grants, timedelta(hours=1)
    )

    # Assert
    assert result.is_ok()
    invitation = mock_uow.invitations.create.call_args[0][0]
    assert invitation.status == InvitationStatus.pending
    assert invitation.invitee_email == "alice@x.com"
    assert invitation.expires_at == clock() + timedelta(hours=1)
    assert invitation.workspace_permissions == [
        {"workspace_id": str(workspace.id), "role_id": str(editor_role.id)}
    ]
    assert result.value.workspace_permissions == grants
    assert mock_uow.audit_events.create.call_args[0][0].action == "invitation_created"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_org_role_of_other_org_is_rejected(mock_uow, clock, org_in_store):
    mock_uow.roles.get_by_id.return_value = Role(
        id=uuid4(), org_id=uuid4(), name="Foreign", actions=["read"]
    )

    use_case = CreateInvitationUseCase(mock_uow, clock=clock)
    result = await use_case.execute(
        org_in_store.id, uuid4(), uuid4(), "alice@x.com", [], timedelta(hours=1)
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_workspace_of_other_org_is_rejected(mock_uow, clock, org_in_store, editor_role):
    foreign = Workspace(id=uuid4(), organization_id=uuid4(), name="elsewhere")
    mock_uow.workspaces.get_by_ids.return_value = [foreign]

    use_case = CreateInvitationUseCase(mock_uow, clock=clock)
    result = await use_case.execute(
        org_in_store.id,
        editor_role.id,
        uuid4(),
        "alice@x.com",
        [WorkspaceRoleGrant(workspace_id=foreign.id, role_id=editor_role.id)],
        timedelta(hours=1),
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email, ttl",
    [("   ", timedelta(hours=1)), ("alice@x.com", timedelta(0)), ("alice@x.com", timedelta(hours=-1))],
)
async def test_blank_email_or_non_positive_ttl(mock_uow, clock, email, ttl):
    use_case = CreateInvitationUseCase(mock_uow, clock=clock)
    result = await use_case.execute(uuid4(), uuid4(), uuid4(), email, [], ttl)

    assert result.is_err()
    assert result.error.code == ErrorCode.VALIDATION_ERROR
    mock_uow.organizations.get_by_id.assert_not_called()


@pytest.mark.asyncio
async def test_live_pending_invitation_conflicts(
    mock_uow, clock, org_in_store, editor_role, make_invitation
):
    existing = make_invitation(org_in_store.id, editor_role.id)
    mock_uow.invitations.get_pending_by_org_and_email.return_value = [existing]

    use_case = CreateInvitationUseCase(mock_uow, clock=clock)
    result = await use_case.execute(
        org_in_store.id, editor_role.id, uuid4(), "alice@x.com", [], timedelta(hours=1)
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.CONFLICT
    mock_uow.invitations.create.assert_not_called()


@pytest.mark.asyncio
async def test_stale_pending_invitation_is_expired_first(
    mock_uow, clock, org_in_store, editor_role, make_invitation
):
    stale = make_invitation(org_in_store.id, editor_role.id, expires_in=timedelta(hours=-1))
    mock_uow.invitations.get_pending_by_org_and_email.return_value = [stale]

    use_case = CreateInvitationUseCase(mock_uow, clock=clock)
    result = await use_case.execute(
        org_in_store.id, editor_role.id, uuid4(), "alice@x.com", [], timedelta(hours=1)
    )

    assert result.is_ok()
    mock_uow.invitations.transition_status.assert_called_once_with(
        stale.id, InvitationStatus.pending, InvitationStatus.expired
    )
    actions = [c.args[0].action for c in mock_uow.audit_events.create.call_args_list]
    assert actions == ["invitation_expired", "invitation_created"]
    assert mock_uow.commit.call_args_list == [call()]
