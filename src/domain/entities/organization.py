"""
Organization Entity

Top-level tenant boundary.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Organization(SQLModel, table=True):
    """
    Organization entity - top-level tenant boundary.

    Business Rules:
    - Owns workspaces, roles, permissions and invitations
    - Created by a signed-in principal during onboarding
    - Never deleted by the access core
    """

    __tablename__ = "organizations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)

    created_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
