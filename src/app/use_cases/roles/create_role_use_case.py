"""
Create Role Use Case

Registers a new named bundle of actions in an organization.
"""

import logging
from typing import Iterable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.role_repository import RoleNameConflictError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ErrorCode, Role

from .dtos import RoleResponse
from .validation import duplicate_name_error, normalize_actions, normalize_name

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """
    Use case for creating a role.

    Business Rules:
    - Organization must exist
    - Name must not be blank and must be unique within the organization
    - Action set must be non-empty and drawn from PermissionAction
    - Actions are stored de-duplicated in vocabulary order
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        org_id: UUID,
        name: str,
        description: Optional[str],
        actions: Iterable[str],
        actor_id: Optional[UUID] = None,
    ) -> Result[RoleResponse]:
        name, error = normalize_name(name)
        if error:
            return Return.err(error)

        normalized_actions, error = normalize_actions(actions)
        if error:
            return Return.err(error)

        async with self.uow:
            organization = await self.uow.organizations.get_by_id(org_id)
            if organization is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Organization not found"))

            duplicate = await self.uow.roles.get_by_org_and_name(org_id, name)
            if duplicate is not None:
                return Return.err(duplicate_name_error(name))

            role = Role(
                org_id=org_id,
                name=name,
                description=description,
                actions=normalized_actions,
            )
            try:
                role = await self.uow.roles.create(role)
            except RoleNameConflictError as exc:
                logger.warning(f"Concurrent role creation lost: {exc}")
                await self.uow.rollback()
                return Return.err(duplicate_name_error(name))

            audit = AuditEvent(
                org_id=org_id,
                actor_id=actor_id,
                action="role_created",
                event_metadata={
                    "role_id": str(role.id),
                    "name": role.name,
                    "actions": role.actions,
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Role {role.id} ({role.name}) created in org {org_id}")
            return Return.ok(RoleResponse.from_entity(role))
