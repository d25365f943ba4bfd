"""
Revoke Permission Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ErrorCode

from .dtos import RevokePermissionResponse

logger = logging.getLogger(__name__)


class RevokePermissionUseCase:
    """
    Use case for destroying a grant.

    Business Rules:
    - The grant must exist and belong to the given organization; a grant of
      another organization is reported as NOT_FOUND
    - Revocation takes effect for the next access check, there is no cache
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, org_id: UUID, permission_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[RevokePermissionResponse]:
        async with self.uow:
            grant = await self.uow.permissions.get_by_id(permission_id)
            if grant is None or grant.org_id != org_id:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Permission not found"))

            await self.uow.permissions.delete(grant)

            audit = AuditEvent(
                org_id=org_id,
                actor_id=actor_id,
                action="permission_revoked",
                event_metadata={
                    "permission_id": str(permission_id),
                    "principal_id": str(grant.principal_id),
                    "role_id": str(grant.role_id),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Permission {permission_id} revoked in org {org_id}")
            return Return.ok(RevokePermissionResponse(status="revoked"))
