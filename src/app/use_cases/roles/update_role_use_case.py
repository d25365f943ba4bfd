"""
Update Role Use Case

Renames a role or replaces its action set.
"""

import logging
from typing import Iterable, Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.role_repository import RoleNameConflictError
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, ErrorCode

from .dtos import RoleResponse
from .validation import duplicate_name_error, normalize_actions, normalize_name

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """
    Use case for updating a role.

    Business Rules:
    - Same validation as creation for every field supplied
    - The action list is replaced as a whole in a single row update, so a
      concurrent access check sees either the old or the new set
    - The role stays in its organization
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        role_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        actions: Optional[Iterable[str]] = None,
        actor_id: Optional[UUID] = None,
    ) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Role not found"))

            changes = {}

            if name is not None:
                new_name, error = normalize_name(name)
                if error:
                    return Return.err(error)
                if new_name != role.name:
                    duplicate = await self.uow.roles.get_by_org_and_name(
                        role.org_id, new_name
                    )
                    if duplicate is not None:
                        return Return.err(duplicate_name_error(new_name))
                    changes["name"] = new_name

            if actions is not None:
                new_actions, error = normalize_actions(actions)
                if error:
                    return Return.err(error)
                changes["actions"] = new_actions

            if description is not None:
                changes["description"] = description

            if not changes:
                return Return.ok(RoleResponse.from_entity(role))

            for field, value in changes.items():
                setattr(role, field, value)
            role.updated_at = utcnow()
            target_name = role.name
            try:
                role = await self.uow.roles.update(role)
            except RoleNameConflictError as exc:
                logger.warning(f"Concurrent role rename lost: {exc}")
                await self.uow.rollback()
                return Return.err(duplicate_name_error(target_name))

            audit = AuditEvent(
                org_id=role.org_id,
                actor_id=actor_id,
                action="role_updated",
                event_metadata={"role_id": str(role.id), "changed": sorted(changes)},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Role {role.id} updated: {sorted(changes)}")
            return Return.ok(RoleResponse.from_entity(role))
