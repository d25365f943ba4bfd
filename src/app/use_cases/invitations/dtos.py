"""
Invitation Use Case DTOs (Data Transfer Objects)

Command and Response classes for the invitation lifecycle.
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.use_cases.permissions.dtos import PermissionResponse
from src.domain.entities import Invitation


# ============================================================================
# Command DTOs
# ============================================================================


class WorkspaceRoleGrant(BaseModel):
    """One (workspace, role) pair granted when an invitation is accepted"""

    workspace_id: UUID
    role_id: UUID

    def to_record(self) -> dict:
        return {"workspace_id": str(self.workspace_id), "role_id": str(self.role_id)}

    @classmethod
    def from_record(cls, record: dict) -> "WorkspaceRoleGrant":
        return cls(workspace_id=UUID(record["workspace_id"]), role_id=UUID(record["role_id"]))


# ============================================================================
# Response DTOs
# ============================================================================


class InvitationResponse(BaseModel):
    """Invitation as returned to callers"""

    id: str
    org_id: str
    org_role_id: str
    inviter_id: str
    invitee_email: str
    status: str
    created_at: str
    expires_at: str
    workspace_permissions: List[WorkspaceRoleGrant]

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "InvitationResponse":
        return cls(
            id=str(invitation.id),
            org_id=str(invitation.org_id),
            org_role_id=str(invitation.org_role_id),
            inviter_id=str(invitation.inviter_id),
            invitee_email=invitation.invitee_email,
            status=invitation.status.value,
            created_at=invitation.created_at.isoformat(),
            expires_at=invitation.expires_at.isoformat(),
            workspace_permissions=[
                WorkspaceRoleGrant.from_record(r) for r in invitation.workspace_permissions
            ],
        )


class InvitationListResponse(BaseModel):
    invitations: List[InvitationResponse]


class PendingInvitationResponse(BaseModel):
    """Response for the pending invitation check"""

    has_pending_invitation: bool


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    invitation_id: str
    org_id: str
    status: str
    grants: List[PermissionResponse]


class RevokeInvitationResponse(BaseModel):
    """Response for revoke invitation use case"""

    status: str


class MyInvitationResponse(InvitationResponse):
    """Invitation as seen by its invitee"""

    organization_name: Optional[str] = None

    @classmethod
    def from_entity(
        cls, invitation: Invitation, organization_name: Optional[str] = None
    ) -> "MyInvitationResponse":
        base = InvitationResponse.from_entity(invitation)
        return cls(**base.model_dump(), organization_name=organization_name)


class MyInvitationListResponse(BaseModel):
    invitations: List[MyInvitationResponse]
