from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.base import utcnow
from src.domain.entities import Invitation, InvitationStatus


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_org_and_email(
        self, org_id: UUID, email: str
    ) -> List[Invitation]:
        """Get invitations still marked pending for an organization and email"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.org_id == org_id,
                Invitation.invitee_email == email,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(Invitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_pending_by_email(self, email: str) -> List[Invitation]:
        """Get invitations still marked pending for an email, across organizations"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.invitee_email == email,
                Invitation.status == InvitationStatus.pending,
            )
            .order_by(Invitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_org_id(self, org_id: UUID) -> List[Invitation]:
        """Get all invitations of an organization"""
        stmt = (
            select(Invitation)
            .where(Invitation.org_id == org_id)
            .order_by(Invitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def transition_status(
        self,
        invitation_id: UUID,
        expected: InvitationStatus,
        new_status: InvitationStatus,
    ) -> bool:
        """
        Compare-and-swap on status.

        The WHERE clause carries the expected status, so of two concurrent
        writers only the first to take the row lock sees rowcount == 1.
        """
        stmt = (
            update(Invitation)
            .where(Invitation.id == invitation_id, Invitation.status == expected)
            .values(status=new_status, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        swapped = result.rowcount == 1

        # Bring any loaded instance in line with the stored row
        invitation = await self.session.get(Invitation, invitation_id)
        if invitation is not None:
            await self.session.refresh(invitation)
        return swapped
