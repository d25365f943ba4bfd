"""
Has Pending Invitation Use Case
"""

from typing import Callable
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Principal

from .dtos import PendingInvitationResponse
from .expiry import expire_if_past_deadline, is_live


class HasPendingInvitationUseCase:
    """
    Does the principal's verified email have a live pending invitation to the org?

    Pending invitations found past their deadline are moved to expired and
    the transition is committed before answering.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, principal: Principal, org_id: UUID
    ) -> Result[PendingInvitationResponse]:
        async with self.uow:
            now = self.clock()
            has_pending = False
            expired_any = False

            for invitation in await self.uow.invitations.get_pending_by_org_and_email(
                org_id, principal.normalized_email
            ):
                if await expire_if_past_deadline(self.uow, invitation, now):
                    expired_any = True
                elif is_live(invitation, now):
                    has_pending = True

            if expired_any:
                await self.uow.commit()

            return Return.ok(PendingInvitationResponse(has_pending_invitation=has_pending))
