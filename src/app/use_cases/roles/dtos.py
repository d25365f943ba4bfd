"""
Role Use Case DTOs (Data Transfer Objects)

Command and Response classes for the role registry.
"""

from typing import List, Optional

from pydantic import BaseModel

from src.domain.entities import Role


class RoleResponse(BaseModel):
    """Role as returned to callers"""

    id: str
    org_id: str
    name: str
    description: Optional[str] = None
    actions: List[str]

    @classmethod
    def from_entity(cls, role: Role) -> "RoleResponse":
        return cls(
            id=str(role.id),
            org_id=str(role.org_id),
            name=role.name,
            description=role.description,
            actions=list(role.actions),
        )


class RoleListResponse(BaseModel):
    roles: List[RoleResponse]


class DeleteRoleResponse(BaseModel):
    id: str
    status: str
