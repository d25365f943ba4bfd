from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.access_gateway import AccessGateway
from src.app.use_cases.permissions import (
    AccessDecision,
    EffectiveActionsResponse,
    OrgAccessResponse,
    PermissionListResponse,
    PermissionResponse,
    RevokePermissionResponse,
)
from src.depends import get_access_gateway
from src.domain.entities import ObjectType, PermissionAction, PrincipalType

router = APIRouter(tags=["Access"])


class AccessCheckRequest(BaseModel):
    """Access check HTTP request payload"""

    object_type: ObjectType
    object_id: UUID
    action: PermissionAction


class AssignRoleRequest(BaseModel):
    """
    Assign role HTTP request payload

    object_id may be omitted for an org-wide grant.
    """

    principal_type: PrincipalType = PrincipalType.user
    principal_id: UUID
    role_id: UUID
    object_type: ObjectType
    object_id: Optional[UUID] = Field(None, description="Workspace ID for workspace grants")


@router.post("/access/check", status_code=status.HTTP_200_OK, response_model=AccessDecision)
async def check_access(
    request: AccessCheckRequest,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Check Access

    Answers whether the caller may perform the action on the object.
    A missing object is reported as a plain deny.
    """
    result = await gateway.check_access(
        request.object_type, request.object_id, request.action
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/access/actions",
    status_code=status.HTTP_200_OK,
    response_model=EffectiveActionsResponse,
)
async def get_effective_actions(
    object_type: ObjectType,
    object_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """List every action the caller holds on the object"""
    result = await gateway.get_effective_actions(object_type, object_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/organizations/{org_id}/access",
    status_code=status.HTTP_200_OK,
    response_model=OrgAccessResponse,
)
async def check_org_access(
    org_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """Does the caller hold any grant in the organization"""
    result = await gateway.check_org_access(org_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/organizations/{org_id}/permissions",
    status_code=status.HTTP_201_CREATED,
    response_model=PermissionResponse,
)
async def assign_role(
    org_id: UUID,
    request: AssignRoleRequest,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Assign Role

    Grants a role to a principal over the organization or one workspace.
    Assigning an existing grant returns it unchanged.

    Raises:
        - 400 Bad Request: Role or workspace belongs to another organization
        - 403 Forbidden: Caller cannot manage the target scope
        - 404 Not Found: Organization, role or workspace missing
        - 409 Conflict: Concurrent conflicting insertion, safe to retry
    """
    result = await gateway.assign_role(
        org_id,
        request.principal_type,
        request.principal_id,
        request.role_id,
        request.object_type,
        request.object_id,
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/organizations/{org_id}/permissions",
    status_code=status.HTTP_200_OK,
    response_model=PermissionListResponse,
)
async def list_permissions(
    org_id: UUID,
    object_type: Optional[ObjectType] = None,
    object_id: Optional[UUID] = None,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    List Permissions

    Every grant of the organization, newest first. Filter with
    object_type=organization for org-wide members, or with
    object_type=workspace and object_id for the members of one workspace.

    Raises:
        - 400 Bad Request: Inconsistent filter, workspace of another organization
        - 403 Forbidden: Caller cannot manage the organization or the workspace
        - 404 Not Found: Workspace missing
    """
    result = await gateway.list_permissions(org_id, object_type, object_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/organizations/{org_id}/permissions/{permission_id}",
    status_code=status.HTTP_200_OK,
    response_model=RevokePermissionResponse,
)
async def revoke_permission(
    org_id: UUID,
    permission_id: UUID,
    gateway: AccessGateway = Depends(get_access_gateway),
):
    """
    Revoke Permission

    Raises:
        - 403 Forbidden: Caller cannot manage the organization
        - 404 Not Found: Grant missing or outside the organization
    """
    result = await gateway.revoke_permission(org_id, permission_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
