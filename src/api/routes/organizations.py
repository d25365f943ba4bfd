from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.access_gateway import AccessGateway
from src.app.use_cases.organizations import OrganizationResponse, WorkspaceResponse
from src.depends import get_access_gateway

router = APIRouter(prefix="/organizations", tags=["Organizations"])


class CreateOrganizationRequest(BaseModel):
    """Create organization HTTP request payload"""

    name: str = Field(..., description="Organization display name")


class CreateWorkspaceRequest(BaseModel):
    """Create workspace HTTP request payload"""

    name: str = Field(..., description="Workspace display name")


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=OrganizationResponse
)
async def create_organization(
    request: CreateOrganizationRequest,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Create Organization

    Creates the organization, an Owner role holding every action, and an
    org-wide grant of that role to the caller.

    Raises:
        - 400 Bad Request: Blank name
        - 401 Unauthorized: Invalid or expired JWT
        - 503 Service Unavailable: Permission store unreachable
    """
    result = await gateway.create_organization(request.name)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{org_id}/workspaces",
    status_code=status.HTTP_201_CREATED,
    response_model=WorkspaceResponse,
)
async def create_workspace(
    org_id: UUID,
    request: CreateWorkspaceRequest,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Create Workspace

    Requires the 'manage' action on the organization.

    Raises:
        - 400 Bad Request: Blank name
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: Caller cannot manage the organization
    """
    result = await gateway.create_workspace(org_id, request.name)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
