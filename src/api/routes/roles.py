from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.access_gateway import AccessGateway
from src.app.use_cases.roles import DeleteRoleResponse, RoleListResponse, RoleResponse
from src.depends import get_access_gateway

router = APIRouter(tags=["Roles"])


class CreateRoleRequest(BaseModel):
    """
    Create role HTTP request payload

    Actions are validated against the action vocabulary by the use case.
    """

    name: str = Field(..., description="Role name, unique within the organization")
    description: Optional[str] = Field(None, description="Free-form description")
    actions: List[str] = Field(..., description="Actions granted by the role")


class UpdateRoleRequest(BaseModel):
    """Update role HTTP request payload; omitted fields are left unchanged"""

    name: Optional[str] = None
    description: Optional[str] = None
    actions: Optional[List[str]] = None


@router.post(
    "/organizations/{org_id}/roles",
    status_code=status.HTTP_201_CREATED,
    response_model=RoleResponse,
)
async def create_role(
    org_id: UUID,
    request: CreateRoleRequest,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Create Role

    Raises:
        - 400 Bad Request: Blank or duplicate name, empty or unknown actions
        - 403 Forbidden: Caller cannot manage the organization
    """
    result = await gateway.create_role(
        org_id, request.name, request.description, request.actions
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/organizations/{org_id}/roles",
    status_code=status.HTTP_200_OK,
    response_model=RoleListResponse,
)
async def list_roles(
    org_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """List the roles of an organization the caller belongs to"""
    result = await gateway.list_roles(org_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/roles/{role_id}", status_code=status.HTTP_200_OK, response_model=RoleResponse)
async def get_role(
    role_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    result = await gateway.get_role(role_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/roles/{role_id}", status_code=status.HTTP_200_OK, response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    request: UpdateRoleRequest,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Update Role

    The action list, when given, replaces the previous one as a whole.

    Raises:
        - 400 Bad Request: Invalid name or actions
        - 403 Forbidden: Caller cannot manage the role's organization
        - 404 Not Found: Role missing or invisible to the caller
    """
    result = await gateway.update_role(
        role_id, request.name, request.description, request.actions
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/roles/{role_id}", status_code=status.HTTP_200_OK, response_model=DeleteRoleResponse
)
async def delete_role(
    role_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Delete Role

    Grants referencing the role remain but stop granting anything.

    Raises:
        - 403 Forbidden: Caller cannot manage the role's organization
        - 404 Not Found: Role missing, already deleted or invisible to the caller
    """
    result = await gateway.delete_role(role_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
