"""
List My Pending Invitations Use Case

The invitee's view: every live invitation addressed to the principal's
verified email, whatever the organization.
"""

from typing import Callable

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Principal

from .dtos import MyInvitationListResponse, MyInvitationResponse
from .expiry import expire_if_past_deadline, is_live


class ListMyPendingInvitationsUseCase:
    """
    Use case for listing the invitations waiting for the caller.

    Stale pending invitations are expired (and committed) on the way and
    left out of the answer. Each entry carries the organization name so the
    invitee can tell where it leads.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, principal: Principal) -> Result[MyInvitationListResponse]:
        async with self.uow:
            now = self.clock()
            live = []
            expired_any = False

            for invitation in await self.uow.invitations.get_pending_by_email(
                principal.normalized_email
            ):
                if await expire_if_past_deadline(self.uow, invitation, now):
                    expired_any = True
                elif is_live(invitation, now):
                    live.append(invitation)

            if expired_any:
                await self.uow.commit()

            org_names = {}
            for invitation in live:
                if invitation.org_id not in org_names:
                    organization = await self.uow.organizations.get_by_id(invitation.org_id)
                    org_names[invitation.org_id] = organization.name if organization else None

            return Return.ok(
                MyInvitationListResponse(
                    invitations=[
                        MyInvitationResponse.from_entity(i, org_names[i.org_id]) for i in live
                    ]
                )
            )
