"""
List Invitations Use Case
"""

from typing import Callable
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import ErrorCode

from .dtos import InvitationListResponse, InvitationResponse
from .expiry import expire_if_past_deadline


class ListInvitationsUseCase:
    """
    Use case for listing an organization's invitations.

    Pending invitations past their deadline are expired (and committed)
    before the list is returned, so no stale pending status leaks out.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(self, org_id: UUID) -> Result[InvitationListResponse]:
        async with self.uow:
            organization = await self.uow.organizations.get_by_id(org_id)
            if organization is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Organization not found"))

            now = self.clock()
            invitations = await self.uow.invitations.get_by_org_id(org_id)

            expired_any = False
            for invitation in invitations:
                if await expire_if_past_deadline(self.uow, invitation, now):
                    expired_any = True

            if expired_any:
                await self.uow.commit()

            return Return.ok(
                InvitationListResponse(
                    invitations=[InvitationResponse.from_entity(i) for i in invitations]
                )
            )
