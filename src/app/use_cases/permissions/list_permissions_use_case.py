"""
List Permissions Use Case

Lists the grants of an organization with the name of the role each one
refers to, optionally narrowed to org-wide grants or to one workspace.
"""

from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ErrorCode, ObjectType

from .dtos import GrantDetailResponse, PermissionListResponse


class ListPermissionsUseCase:
    """
    Use case for listing grants.

    Business Rules:
    - Newest grants first
    - object_id needs object_type; an org-wide filter only accepts the org's own ID
    - A workspace filter must name a workspace of the same organization
    - Grants of a deleted role are listed without a role name
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        org_id: UUID,
        object_type: Optional[ObjectType] = None,
        object_id: Optional[UUID] = None,
    ) -> Result[PermissionListResponse]:
        if object_id is not None and object_type is None:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "object_type is required with object_id")
            )

        async with self.uow:
            organization = await self.uow.organizations.get_by_id(org_id)
            if organization is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Organization not found"))

            if object_type == ObjectType.organization:
                if object_id is not None and object_id != org_id:
                    return Return.err(
                        Error(
                            ErrorCode.VALIDATION_ERROR,
                            "Org-wide grants must target the organization itself",
                        )
                    )
                object_id = org_id

            if object_type == ObjectType.workspace and object_id is not None:
                workspace = await self.uow.workspaces.get_by_id(object_id)
                if workspace is None:
                    return Return.err(Error(ErrorCode.NOT_FOUND, "Workspace not found"))
                if workspace.organization_id != org_id:
                    return Return.err(
                        Error(
                            ErrorCode.VALIDATION_ERROR,
                            "Workspace does not belong to this organization",
                        )
                    )

            grants = await self.uow.permissions.list_by_org(org_id, object_type, object_id)
            roles = await self.uow.roles.get_by_ids(g.role_id for g in grants)
            names = {role.id: role.name for role in roles}

            return Return.ok(
                PermissionListResponse(
                    permissions=[
                        GrantDetailResponse.from_entity(g, names.get(g.role_id))
                        for g in grants
                    ]
                )
            )
