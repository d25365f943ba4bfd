from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.entities import (
    Invitation,
    InvitationStatus,
    ObjectType,
    Organization,
    Permission,
    Principal,
    PrincipalType,
    Role,
    Workspace,
)

NOW = datetime(2026, 1, 1, 12, 0, 0)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.organizations = MagicMock()
    uow.organizations.get_by_id = AsyncMock(return_value=None)
    uow.organizations.create = AsyncMock(side_effect=lambda org: org)

    uow.workspaces = MagicMock()
    uow.workspaces.get_by_id = AsyncMock(return_value=None)
    uow.workspaces.get_by_ids = AsyncMock(return_value=[])
    uow.workspaces.create = AsyncMock(side_effect=lambda ws: ws)

    uow.roles = MagicMock()
    uow.roles.get_by_id = AsyncMock(return_value=None)
    uow.roles.get_by_ids = AsyncMock(return_value=[])
    uow.roles.get_by_org_and_name = AsyncMock(return_value=None)
    uow.roles.list_by_org = AsyncMock(return_value=[])
    uow.roles.create = AsyncMock(side_effect=lambda role: role)
    uow.roles.update = AsyncMock(side_effect=lambda role: role)

    uow.permissions = MagicMock()
    uow.permissions.find_grants = AsyncMock(return_value=[])
    uow.permissions.insert_grant = AsyncMock(side_effect=lambda grant: grant)
    uow.permissions.list_by_org = AsyncMock(return_value=[])
    uow.permissions.has_any_grant = AsyncMock(return_value=False)
    uow.permissions.get_by_id = AsyncMock(return_value=None)
    uow.permissions.delete = AsyncMock()

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.get_pending_by_org_and_email = AsyncMock(return_value=[])
    uow.invitations.get_pending_by_email = AsyncMock(return_value=[])
    uow.invitations.get_by_org_id = AsyncMock(return_value=[])
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.transition_status = AsyncMock(return_value=True)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock()

    return uow


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def organization():
    return Organization(id=uuid4(), name="Acme", created_by=uuid4())


@pytest.fixture
def workspace(organization):
    return Workspace(id=uuid4(), organization_id=organization.id, name="ws1")


@pytest.fixture
def editor_role(organization):
    return Role(id=uuid4(), org_id=organization.id, name="Editor", actions=["read", "write"])


@pytest.fixture
def viewer_role(organization):
    return Role(id=uuid4(), org_id=organization.id, name="Viewer", actions=["read"])


@pytest.fixture
def alice():
    return Principal(id=uuid4(), email="alice@x.com")


def _make_grant(principal_id, role, object_type, object_id):
    return Permission(
        id=uuid4(),
        org_id=role.org_id,
        principal_type=PrincipalType.user,
        principal_id=principal_id,
        role_id=role.id,
        object_type=object_type,
        object_id=object_id,
    )


def _make_invitation(org_id, role_id, email="alice@x.com", expires_in=timedelta(days=7), **kw):
    return Invitation(
        id=uuid4(),
        org_id=org_id,
        org_role_id=role_id,
        inviter_id=uuid4(),
        invitee_email=email,
        status=kw.pop("status", InvitationStatus.pending),
        workspace_permissions=kw.pop("workspace_permissions", []),
        created_at=NOW - timedelta(minutes=5),
        updated_at=NOW - timedelta(minutes=5),
        expires_at=NOW + expires_in,
    )


@pytest.fixture
def org_grant(alice, editor_role, organization):
    return _make_grant(alice.id, editor_role, ObjectType.organization, organization.id)


@pytest.fixture
def make_grant():
    return _make_grant


@pytest.fixture
def make_invitation():
    return _make_invitation
