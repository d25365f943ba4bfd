from datetime import timedelta
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from src.app.services.access_gateway import AccessGateway
from src.domain.entities import ErrorCode, ObjectType, PermissionAction, PrincipalType


@pytest.fixture
def alice_owns_org(mock_uow, alice, organization, editor_role, make_grant):
    """alice holds an all-actions role org-wide"""
    editor_role.actions = [a.value for a in PermissionAction]
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.permissions.find_grants.return_value = [
        make_grant(alice.id, editor_role, ObjectType.organization, organization.id)
    ]
    mock_uow.roles.get_by_ids.return_value = [editor_role]
    return organization


@pytest.mark.asyncio
async def test_check_access_hides_missing_object(mock_uow, alice):
    gateway = AccessGateway(mock_uow, alice)
    result = await gateway.check_access(ObjectType.workspace, uuid4(), PermissionAction.read)

    assert result.is_ok()
    assert result.value.granted is False


@pytest.mark.asyncio
async def test_store_failure_is_unavailable(mock_uow, alice):
    mock_uow.organizations.get_by_id.side_effect = OperationalError(
        "SELECT 1", {}, Exception("connection refused")
    )

    gateway = AccessGateway(mock_uow, alice)
    result = await gateway.check_access(
        ObjectType.organization, uuid4(), PermissionAction.read
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.UNAVAILABLE


@pytest.mark.asyncio
async def test_mutation_without_manage_is_forbidden(
    mock_uow, alice, organization, viewer_role, make_grant
):
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.permissions.find_grants.return_value = [
        make_grant(alice.id, viewer_role, ObjectType.organization, organization.id)
    ]
    mock_uow.roles.get_by_ids.return_value = [viewer_role]

    gateway = AccessGateway(mock_uow, alice)
    result = await gateway.create_role(organization.id, "Editor", None, ["write"])

    assert result.is_err()
    assert result.error.code == ErrorCode.FORBIDDEN
    mock_uow.roles.create.assert_not_called()


@pytest.mark.asyncio
async def test_manager_assigns_role(mock_uow, alice, alice_owns_org, viewer_role):
    mock_uow.roles.get_by_id.return_value = viewer_role
    bob_id = uuid4()

    gateway = AccessGateway(mock_uow, alice)
    result = await gateway.assign_role(
        alice_owns_org.id, PrincipalType.user, bob_id, viewer_role.id, ObjectType.organization
    )

    assert result.is_ok()
    assert result.value.principal_id == str(bob_id)


@pytest.mark.asyncio
async def test_invitation_uses_default_ttl(mock_uow, alice, alice_owns_org, editor_role, clock):
    mock_uow.roles.get_by_id.return_value = editor_role

    gateway = AccessGateway(mock_uow, alice, invitation_ttl=timedelta(hours=3), clock=clock)
    result = await gateway.create_invitation(alice_owns_org.id, editor_role.id, "bob@x.com")

    assert result.is_ok()
    invitation = mock_uow.invitations.create.call_args[0][0]
    assert invitation.expires_at == clock() + timedelta(hours=3)
    assert invitation.inviter_id == alice.id


@pytest.mark.asyncio
async def test_get_role_of_foreign_org_is_not_found(mock_uow, alice, editor_role):
    mock_uow.roles.get_by_id.return_value = editor_role
    mock_uow.permissions.has_any_grant.return_value = False

    gateway = AccessGateway(mock_uow, alice)
    result = await gateway.get_role(editor_role.id)

    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_listing_grants_needs_manage(
    mock_uow, alice, organization, viewer_role, make_grant
):
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.permissions.find_grants.return_value = [
        make_grant(alice.id, viewer_role, ObjectType.organization, organization.id)
    ]
    mock_uow.roles.get_by_ids.return_value = [viewer_role]

    gateway = AccessGateway(mock_uow, alice)
    result = await gateway.list_permissions(organization.id)

    assert result.is_err()
    assert result.error.code == ErrorCode.FORBIDDEN
    mock_uow.permissions.list_by_org.assert_not_called()


@pytest.mark.asyncio
async def test_workspace_manager_lists_workspace_grants(
    mock_uow, alice, organization, workspace, editor_role, make_grant
):
    # manage on ws1 only, nothing org-wide
    editor_role.actions = ["read", "manage"]
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.workspaces.get_by_id.return_value = workspace
    mock_uow.permissions.find_grants.return_value = [
        make_grant(alice.id, editor_role, ObjectType.workspace, workspace.id)
    ]
    mock_uow.roles.get_by_ids.return_value = [editor_role]

    gateway = AccessGateway(mock_uow, alice)
    scoped = await gateway.list_permissions(organization.id, ObjectType.workspace, workspace.id)
    everything = await gateway.list_permissions(organization.id)

    assert scoped.is_ok()
    assert everything.is_err()
    assert everything.error.code == ErrorCode.FORBIDDEN


@pytest.mark.asyncio
async def test_delete_role_needs_manage(
    mock_uow, alice, organization, viewer_role, make_grant
):
    mock_uow.roles.get_by_id.return_value = viewer_role
    mock_uow.permissions.has_any_grant.return_value = True
    mock_uow.organizations.get_by_id.return_value = organization
    mock_uow.permissions.find_grants.return_value = [
        make_grant(alice.id, viewer_role, ObjectType.organization, organization.id)
    ]
    mock_uow.roles.get_by_ids.return_value = [viewer_role]

    gateway = AccessGateway(mock_uow, alice)
    result = await gateway.delete_role(viewer_role.id)

    assert result.is_err()
    assert result.error.code == ErrorCode.FORBIDDEN
    mock_uow.roles.update.assert_not_called()
