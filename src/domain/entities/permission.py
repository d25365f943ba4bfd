"""
Permission Entity

A grant binding one principal to one role over one object scope.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import ObjectType, PrincipalType


class Permission(SQLModel, table=True):
    """
    Permission entity - (principal, role, object scope) grant.

    Business Rules:
    - (principal_id, role_id, object_type, object_id) is unique
    - Org-wide grants carry object_id = org_id so the unique index covers them
    - Workspace grants reference a workspace of the same organization
    - Destroyed only by explicit revocation
    """

    __tablename__ = "permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    org_id: UUID = Field(foreign_key="organizations.id", nullable=False)

    principal_type: PrincipalType = Field(default=PrincipalType.user, nullable=False)
    principal_id: UUID = Field(nullable=False)

    role_id: UUID = Field(foreign_key="roles.id", nullable=False)

    object_type: ObjectType = Field(nullable=False)
    object_id: Optional[UUID] = Field(default=None)

    created_by: Optional[UUID] = Field(default=None)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "idx_permission_unique_grant",
            "principal_id",
            "role_id",
            "object_type",
            "object_id",
            unique=True,
        ),
        Index("idx_permission_principal_org", "principal_id", "org_id"),
    )
