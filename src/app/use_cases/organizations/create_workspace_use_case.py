"""
Create Workspace Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, ErrorCode, Workspace

from .dtos import WorkspaceResponse

logger = logging.getLogger(__name__)


class CreateWorkspaceUseCase:
    """Use case for adding a workspace to an organization"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, org_id: UUID, name: str, actor_id: Optional[UUID] = None
    ) -> Result[WorkspaceResponse]:
        name = (name or "").strip()
        if not name:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "Workspace name must not be blank")
            )

        async with self.uow:
            organization = await self.uow.organizations.get_by_id(org_id)
            if organization is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Organization not found"))

            workspace = await self.uow.workspaces.create(
                Workspace(organization_id=org_id, name=name)
            )

            audit = AuditEvent(
                org_id=org_id,
                actor_id=actor_id,
                action="workspace_created",
                event_metadata={"workspace_id": str(workspace.id), "name": name},
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Workspace {workspace.id} created in org {org_id}")
            return Return.ok(
                WorkspaceResponse(
                    id=str(workspace.id),
                    organization_id=str(workspace.organization_id),
                    name=workspace.name,
                )
            )
