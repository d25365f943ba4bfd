from typing import List, Optional
from datetime import timedelta
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.error import raise_for_error
from src.app.services.access_gateway import AccessGateway
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    InvitationListResponse,
    InvitationResponse,
    MyInvitationListResponse,
    PendingInvitationResponse,
    RevokeInvitationResponse,
    WorkspaceRoleGrant,
)
from src.depends import get_access_gateway

router = APIRouter(tags=["Invitations"])


class CreateInvitationRequest(BaseModel):
    """
    Create invitation HTTP request payload

    The invitee receives org_role_id org-wide, plus each workspace role
    listed in workspace_permissions.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    org_role_id: UUID = Field(..., description="Role granted over the whole organization")
    workspace_permissions: List[WorkspaceRoleGrant] = Field(default_factory=list)
    ttl_hours: Optional[float] = Field(
        None, description="Lifetime of the invitation; server default when omitted"
    )


@router.post(
    "/organizations/{org_id}/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InvitationResponse,
)
async def create_invitation(
    org_id: UUID,
    request: CreateInvitationRequest,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Create Invitation

    Email delivery is left to the caller; the returned ID identifies the
    invitation in the acceptance link.

    Raises:
        - 400 Bad Request: Role or workspace outside the organization, bad lifetime
        - 403 Forbidden: Caller lacks the 'invite' action on the organization
        - 409 Conflict: A pending invitation already exists for this email
    """
    ttl = timedelta(hours=request.ttl_hours) if request.ttl_hours is not None else None
    result = await gateway.create_invitation(
        org_id,
        request.org_role_id,
        request.email,
        request.workspace_permissions,
        ttl=ttl,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/organizations/{org_id}/invitations",
    status_code=status.HTTP_200_OK,
    response_model=InvitationListResponse,
)
async def list_invitations(
    org_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """List invitations of an organization, oldest first"""
    result = await gateway.list_invitations(org_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/organizations/{org_id}/invitations/pending",
    status_code=status.HTTP_200_OK,
    response_model=PendingInvitationResponse,
)
async def has_pending_invitation(
    org_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """Does a live invitation to the organization await the caller's email"""
    result = await gateway.has_pending_invitation(org_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/organizations/{org_id}/invitations/{invitation_id}/revoke",
    status_code=status.HTTP_200_OK,
    response_model=RevokeInvitationResponse,
)
async def revoke_invitation(
    org_id: UUID,
    invitation_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Revoke Invitation

    Raises:
        - 403 Forbidden: Caller lacks the 'invite' action on the organization
        - 404 Not Found: Invitation missing or in another organization
        - 409 Conflict: Invitation is no longer pending
        - 410 Gone: Invitation had already expired
    """
    result = await gateway.revoke_invitation(org_id, invitation_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/invitations/pending",
    status_code=status.HTTP_200_OK,
    response_model=MyInvitationListResponse,
)
async def list_my_pending_invitations(
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """Live invitations addressed to the caller's email, in every organization"""
    result = await gateway.list_my_pending_invitations()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/invitations/{invitation_id}/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    invitation_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Accept Invitation

    Grants the invited roles to the caller, exactly once.

    Raises:
        - 403 Forbidden: Invitation addressed to another email
        - 404 Not Found: Invitation missing
        - 409 Conflict: ALREADY_PROCESSED
        - 410 Gone: INVITATION_EXPIRED
    """
    result = await gateway.accept_invitation(invitation_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
