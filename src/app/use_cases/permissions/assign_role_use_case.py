"""
Assign Role Use Case

Write path of the permission resolution engine.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.permission_repository import GrantConflictError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    ErrorCode,
    ObjectType,
    Permission,
    PrincipalType,
)

from .dtos import PermissionResponse

logger = logging.getLogger(__name__)


async def build_grant(
    uow: UnitOfWork,
    org_id: UUID,
    principal_type: PrincipalType,
    principal_id: UUID,
    role_id: UUID,
    object_type: ObjectType,
    object_id: Optional[UUID],
    created_by: Optional[UUID] = None,
) -> Result[Permission]:
    """
    Validate the scope of a prospective grant and build it.

    - The role must belong to org_id
    - A workspace grant must name a workspace of org_id
    - An org-wide grant may omit object_id; it is stored as org_id
    """
    role = await uow.roles.get_by_id(role_id)
    if role is None:
        return Return.err(Error(ErrorCode.NOT_FOUND, "Role not found"))
    if role.org_id != org_id:
        return Return.err(
            Error(ErrorCode.VALIDATION_ERROR, "Role does not belong to this organization")
        )

    if object_type == ObjectType.workspace:
        if object_id is None:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "A workspace grant requires a workspace ID")
            )
        workspace = await uow.workspaces.get_by_id(object_id)
        if workspace is None:
            return Return.err(Error(ErrorCode.NOT_FOUND, "Workspace not found"))
        if workspace.organization_id != org_id:
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_ERROR,
                    "Workspace does not belong to this organization",
                )
            )
    else:
        if object_id is not None and object_id != org_id:
            return Return.err(
                Error(
                    ErrorCode.VALIDATION_ERROR,
                    "An organization grant must target its own organization",
                )
            )
        object_id = org_id

    return Return.ok(
        Permission(
            org_id=org_id,
            principal_type=principal_type,
            principal_id=principal_id,
            role_id=role_id,
            object_type=object_type,
            object_id=object_id,
            created_by=created_by,
        )
    )


class AssignRoleUseCase:
    """
    Use case for granting a role to a principal over an object scope.

    Business Rules:
    - Organization must exist
    - Role and workspace must belong to the organization (VALIDATION_ERROR otherwise)
    - Insertion is idempotent: assigning an existing grant returns it unchanged
    - A store-level uniqueness conflict is reported as CONFLICT; retrying is safe
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        org_id: UUID,
        principal_type: PrincipalType,
        principal_id: UUID,
        role_id: UUID,
        object_type: ObjectType,
        object_id: Optional[UUID] = None,
        actor_id: Optional[UUID] = None,
    ) -> Result[PermissionResponse]:
        async with self.uow:
            organization = await self.uow.organizations.get_by_id(org_id)
            if organization is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Organization not found"))

            built = await build_grant(
                self.uow,
                org_id,
                principal_type,
                principal_id,
                role_id,
                object_type,
                object_id,
                created_by=actor_id,
            )
            if built.is_err():
                return Return.err(built.error)

            try:
                grant = await self.uow.permissions.insert_grant(built.value)
            except GrantConflictError as exc:
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.CONFLICT, str(exc)))

            audit = AuditEvent(
                org_id=org_id,
                actor_id=actor_id,
                action="role_assigned",
                event_metadata={
                    "permission_id": str(grant.id),
                    "principal_id": str(principal_id),
                    "role_id": str(role_id),
                    "object_type": object_type.value,
                    "object_id": str(grant.object_id),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(
                f"Granted role {role_id} to {principal_type.value} {principal_id} "
                f"on {object_type.value} {grant.object_id}"
            )
            return Return.ok(PermissionResponse.from_entity(grant))
