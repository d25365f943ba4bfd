"""
Delete Role Use Case

Soft-deletes a role. Grants that reference it stay in place but no longer
contribute any action, since deleted roles are invisible to role lookups.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, ErrorCode

from .dtos import DeleteRoleResponse

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """
    Use case for deleting a role.

    Business Rules:
    - Only a live role can be deleted; a deleted role is NOT_FOUND
    - The name stays reserved in the organization
    - Access checks stop honouring grants of the role immediately
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, role_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[DeleteRoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Role not found"))

            now = utcnow()
            role.deleted_at = now
            role.updated_at = now
            role = await self.uow.roles.update(role)

            audit = AuditEvent(
                org_id=role.org_id,
                actor_id=actor_id,
                action="role_deleted",
                event_metadata={"role_id": str(role.id), "name": role.name},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Role {role.id} ({role.name}) deleted in org {role.org_id}")
            return Return.ok(DeleteRoleResponse(id=str(role.id), status="deleted"))
