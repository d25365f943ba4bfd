"""
Permission Use Case DTOs (Data Transfer Objects)

Response classes for access checks and grant management.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Permission


class AccessDecision(BaseModel):
    """Outcome of an access check"""

    granted: bool


class OrgAccessResponse(BaseModel):
    """Outcome of an organization membership check"""

    has_access: bool


class EffectiveActionsResponse(BaseModel):
    """Union of actions a principal holds on one object"""

    actions: List[str]


class PermissionResponse(BaseModel):
    """Grant as returned to callers"""

    id: str
    org_id: str
    principal_type: str
    principal_id: str
    role_id: str
    object_type: str
    object_id: Optional[str] = None

    @classmethod
    def from_entity(cls, grant: Permission) -> "PermissionResponse":
        return cls(
            id=str(grant.id),
            org_id=str(grant.org_id),
            principal_type=grant.principal_type.value,
            principal_id=str(grant.principal_id),
            role_id=str(grant.role_id),
            object_type=grant.object_type.value,
            object_id=str(grant.object_id) if grant.object_id else None,
        )


class RevokePermissionResponse(BaseModel):
    status: str


class GrantDetailResponse(PermissionResponse):
    """Grant with the name of its role; None once the role is deleted"""

    role_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, grant: Permission, role_name: Optional[str] = None) -> "GrantDetailResponse":
        base = PermissionResponse.from_entity(grant)
        return cls(**base.model_dump(), role_name=role_name, created_at=grant.created_at)


class PermissionListResponse(BaseModel):
    permissions: List[GrantDetailResponse]
