"""
Revoke Invitation Use Case
"""

import logging
from typing import Callable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, ErrorCode, InvitationStatus

from .dtos import RevokeInvitationResponse
from .expiry import expire_if_past_deadline

logger = logging.getLogger(__name__)


class RevokeInvitationUseCase:
    """
    Use case for revoking a pending invitation.

    Business Rules:
    - Invitation must exist in the given organization (NOT_FOUND otherwise)
    - Terminal invitations cannot be revoked (INVALID_STATE)
    - A pending invitation past its deadline is expired instead
      (INVITATION_EXPIRED)
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, org_id: UUID, invitation_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[RevokeInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.org_id != org_id:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Invitation not found"))

            if invitation.status.is_terminal:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_STATE,
                        f"Cannot revoke an invitation that is {invitation.status.value}",
                    )
                )

            if await expire_if_past_deadline(self.uow, invitation, self.clock()):
                await self.uow.commit()
                return Return.err(
                    Error(ErrorCode.INVITATION_EXPIRED, "This invitation has expired")
                )

            revoked = await self.uow.invitations.transition_status(
                invitation.id, InvitationStatus.pending, InvitationStatus.revoked
            )
            if not revoked:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_STATE,
                        "The invitation was processed by another request",
                    )
                )

            audit = AuditEvent(
                org_id=org_id,
                actor_id=actor_id,
                action="invitation_revoked",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "invitee_email": invitation.invitee_email,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invitation {invitation.id} revoked")
            return Return.ok(RevokeInvitationResponse(status=InvitationStatus.revoked.value))
