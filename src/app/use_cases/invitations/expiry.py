"""
Lazy invitation expiry.

No background sweep exists: every path that acts on a pending invitation
checks its deadline first and persists the expiry it observes.
"""

import logging
from datetime import datetime

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, Invitation, InvitationStatus

logger = logging.getLogger(__name__)


async def expire_if_past_deadline(
    uow: UnitOfWork, invitation: Invitation, now: datetime
) -> bool:
    """
    Transition a pending invitation to expired when its deadline has passed.

    Returns True only when this call moved the invitation to expired. When
    another writer changed the status first, False is returned and
    `invitation.status` holds the stored status. The caller owns the commit.
    """
    if invitation.status != InvitationStatus.pending:
        return False
    if not invitation.is_past_deadline(now):
        return False

    swapped = await uow.invitations.transition_status(
        invitation.id, InvitationStatus.pending, InvitationStatus.expired
    )
    if not swapped:
        logger.info(f"Invitation {invitation.id} changed status before it could be expired")
        return False

    audit = AuditEvent(
        org_id=invitation.org_id,
        action="invitation_expired",
        event_metadata={
            "invitation_id": str(invitation.id),
            "expires_at": invitation.expires_at.isoformat(),
        },
    )
    await uow.audit_events.create(audit)
    logger.info(f"Invitation {invitation.id} expired (deadline {invitation.expires_at})")
    return True


def is_live(invitation: Invitation, now: datetime) -> bool:
    """Pending and still within its deadline"""
    return invitation.status == InvitationStatus.pending and not invitation.is_past_deadline(now)
