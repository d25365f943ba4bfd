from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Invitation, InvitationStatus


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_pending_by_org_and_email(
        self, org_id: UUID, email: str
    ) -> List[Invitation]:
        """Get invitations still marked pending for an organization and email"""
        pass

    @abstractmethod
    async def get_pending_by_email(self, email: str) -> List[Invitation]:
        """Get invitations still marked pending for an email, across organizations"""
        pass

    @abstractmethod
    async def get_by_org_id(self, org_id: UUID) -> List[Invitation]:
        """Get all invitations of an organization"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def transition_status(
        self,
        invitation_id: UUID,
        expected: InvitationStatus,
        new_status: InvitationStatus,
    ) -> bool:
        """
        Conditionally move an invitation from `expected` to `new_status`.

        Returns False when the stored status was not `expected`, i.e. another
        writer got there first.
        """
        pass
