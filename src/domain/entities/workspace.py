"""
Workspace Entity

Leaf scope inside exactly one organization.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Workspace(SQLModel, table=True):
    """
    Workspace entity - sub-scope of an organization.

    Business Rules:
    - Belongs to exactly one organization
    - Cannot contain further scopes
    """

    __tablename__ = "workspaces"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    organization_id: UUID = Field(foreign_key="organizations.id", nullable=False)
    name: str = Field(max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_workspace_organization_id", "organization_id"),)
