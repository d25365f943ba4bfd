"""
Create Organization Use Case

Onboarding: a signed-in principal creates an organization and owns it.
"""

import logging

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditEvent,
    ErrorCode,
    ObjectType,
    Organization,
    Permission,
    PermissionAction,
    Principal,
    Role,
)

from .dtos import OrganizationResponse

logger = logging.getLogger(__name__)

OWNER_ROLE_NAME = "Owner"


class CreateOrganizationUseCase:
    """
    Use case for creating an organization.

    Business Rules:
    - Name must not be blank
    - An "Owner" role granting every action is created in the organization
    - The creator receives that role org-wide, in the same transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal: Principal, name: str) -> Result[OrganizationResponse]:
        name = (name or "").strip()
        if not name:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "Organization name must not be blank")
            )

        async with self.uow:
            organization = await self.uow.organizations.create(
                Organization(name=name, created_by=principal.id)
            )

            owner_role = await self.uow.roles.create(
                Role(
                    org_id=organization.id,
                    name=OWNER_ROLE_NAME,
                    description="Full control of the organization",
                    actions=[a.value for a in PermissionAction],
                )
            )

            grant = await self.uow.permissions.insert_grant(
                Permission(
                    org_id=organization.id,
                    principal_type=principal.kind,
                    principal_id=principal.id,
                    role_id=owner_role.id,
                    object_type=ObjectType.organization,
                    object_id=organization.id,
                    created_by=principal.id,
                )
            )

            audit = AuditEvent(
                org_id=organization.id,
                actor_id=principal.id,
                action="organization_created",
                event_metadata={"name": name, "owner_role_id": str(owner_role.id)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Organization {organization.id} created by {principal.id}")
            return Return.ok(
                OrganizationResponse(
                    id=str(organization.id),
                    name=organization.name,
                    owner_role_id=str(owner_role.id),
                    owner_permission_id=str(grant.id),
                )
            )
