"""
Role Entity

Named bundle of permission actions, scoped to an organization.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class Role(SQLModel, table=True):
    """
    Role entity - named, ordered set of actions.

    Business Rules:
    - Scoped to exactly one organization
    - (org_id, name) must be unique, deleted roles included
    - Action set is never empty and only holds PermissionAction values
    - Actions are stored in one JSON column so a reader never sees a partial set
    - Deletion is soft: deleted_at is set once and the role stops granting anything
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", nullable=False)

    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    actions: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    deleted_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    __table_args__ = (Index("idx_role_org_name", "org_id", "name", unique=True),)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
