"""
Invitation Lifecycle Use Cases

Creation, lazy expiry, acceptance and revocation of invitations.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .create_invitation_use_case import CreateInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    InvitationListResponse,
    InvitationResponse,
    MyInvitationListResponse,
    MyInvitationResponse,
    PendingInvitationResponse,
    RevokeInvitationResponse,
    WorkspaceRoleGrant,
)
from .has_pending_invitation_use_case import HasPendingInvitationUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .list_my_pending_invitations_use_case import ListMyPendingInvitationsUseCase
from .revoke_invitation_use_case import RevokeInvitationUseCase

__all__ = [
    "AcceptInvitationUseCase",
    "CreateInvitationUseCase",
    "HasPendingInvitationUseCase",
    "ListInvitationsUseCase",
    "ListMyPendingInvitationsUseCase",
    "RevokeInvitationUseCase",
    "AcceptInvitationResponse",
    "InvitationListResponse",
    "InvitationResponse",
    "MyInvitationListResponse",
    "MyInvitationResponse",
    "PendingInvitationResponse",
    "RevokeInvitationResponse",
    "WorkspaceRoleGrant",
]
