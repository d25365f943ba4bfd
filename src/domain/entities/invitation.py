"""
Invitation Entity

Time-bounded offer of a role to an email address.
"""

from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import InvitationStatus


class Invitation(SQLModel, table=True):
    """
    Invitation entity - offer of an org role (plus workspace roles) to an email.

    Business Rules:
    - Created pending, expires_at = created_at + ttl
    - Expiry is lazy: every path acting on a pending invitation checks the
      deadline and persists the expired transition it observes
    - accepted / expired / revoked are terminal
    - workspace_permissions is an ordered list of {"workspace_id", "role_id"}
    """

    __tablename__ = "invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    org_id: UUID = Field(foreign_key="organizations.id", nullable=False)
    org_role_id: UUID = Field(foreign_key="roles.id", nullable=False)
    inviter_id: UUID = Field(nullable=False)
    invitee_email: str = Field(max_length=255, nullable=False)

    status: InvitationStatus = Field(default=InvitationStatus.pending)
    workspace_permissions: List[dict] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_org_email", "org_id", "invitee_email"),
        Index("idx_invitation_status", "status"),
        Index("idx_invitation_expires_at", "expires_at"),
    )

    def is_past_deadline(self, now: datetime) -> bool:
        return now > self.expires_at
