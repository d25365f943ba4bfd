"""
Organization Use Case DTOs (Data Transfer Objects)
"""

from pydantic import BaseModel


class OrganizationResponse(BaseModel):
    """Response for create organization use case"""

    id: str
    name: str
    owner_role_id: str
    owner_permission_id: str


class WorkspaceResponse(BaseModel):
    """Response for create workspace use case"""

    id: str
    organization_id: str
    name: str
