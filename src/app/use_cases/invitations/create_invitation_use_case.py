"""
Create Invitation Use Case

Offers an organization role (and optional workspace roles) to an email address.
"""

import logging
from datetime import timedelta
from typing import Callable, Sequence
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, ErrorCode, Invitation

from .dtos import InvitationResponse, WorkspaceRoleGrant
from .expiry import expire_if_past_deadline, is_live

logger = logging.getLogger(__name__)


class CreateInvitationUseCase:
    """
    Use case for creating an invitation.

    Business Rules:
    - Invitation starts pending with expires_at = now + ttl
    - The org role must belong to the organization
    - Every workspace and workspace role must belong to the organization
    - At most one live pending invitation per (organization, email);
      stale pending invitations are expired on the way
    - The invitee email is stored lower-cased
    - Email delivery is the caller's concern; the invitation ID is enough
      to build the link
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        org_id: UUID,
        org_role_id: UUID,
        inviter_id: UUID,
        invitee_email: str,
        workspace_permissions: Sequence[WorkspaceRoleGrant],
        ttl: timedelta,
    ) -> Result[InvitationResponse]:
        email = (invitee_email or "").strip().lower()
        if not email:
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "Invitee email must not be blank")
            )
        if ttl <= timedelta(0):
            return Return.err(
                Error(ErrorCode.VALIDATION_ERROR, "Invitation lifetime must be positive")
            )

        async with self.uow:
            organization = await self.uow.organizations.get_by_id(org_id)
            if organization is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Organization not found"))

            org_role = await self.uow.roles.get_by_id(org_role_id)
            if org_role is None or org_role.org_id != org_id:
                return Return.err(
                    Error(
                        ErrorCode.VALIDATION_ERROR,
                        "Organization role does not belong to this organization",
                    )
                )

            error = await self._validate_workspace_permissions(org_id, workspace_permissions)
            if error:
                return Return.err(error)

            now = self.clock()
            expired_any = False
            live_pending = False
            for pending in await self.uow.invitations.get_pending_by_org_and_email(
                org_id, email
            ):
                if await expire_if_past_deadline(self.uow, pending, now):
                    expired_any = True
                elif is_live(pending, now):
                    live_pending = True

            if live_pending:
                if expired_any:
                    await self.uow.commit()
                return Return.err(
                    Error(
                        ErrorCode.CONFLICT,
                        "A pending invitation already exists for this email",
                    )
                )

            invitation = Invitation(
                org_id=org_id,
                org_role_id=org_role_id,
                inviter_id=inviter_id,
                invitee_email=email,
                workspace_permissions=[wp.to_record() for wp in workspace_permissions],
                created_at=now,
                updated_at=now,
                expires_at=now + ttl,
            )
            invitation = await self.uow.invitations.create(invitation)

            audit = AuditEvent(
                org_id=org_id,
                actor_id=inviter_id,
                action="invitation_created",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "invitee_email": email,
                    "org_role_id": str(org_role_id),
                    "workspace_count": len(workspace_permissions),
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(f"Invitation {invitation.id} created for org {org_id}")
            return Return.ok(InvitationResponse.from_entity(invitation))

    async def _validate_workspace_permissions(
        self, org_id: UUID, workspace_permissions: Sequence[WorkspaceRoleGrant]
    ):
        if not workspace_permissions:
            return None

        workspaces = await self.uow.workspaces.get_by_ids(
            wp.workspace_id for wp in workspace_permissions
        )
        workspace_orgs = {w.id: w.organization_id for w in workspaces}
        roles = await self.uow.roles.get_by_ids(wp.role_id for wp in workspace_permissions)
        role_orgs = {r.id: r.org_id for r in roles}

        for wp in workspace_permissions:
            if workspace_orgs.get(wp.workspace_id) != org_id:
                return Error(
                    ErrorCode.VALIDATION_ERROR,
                    f"Workspace {wp.workspace_id} does not belong to this organization",
                )
            if role_orgs.get(wp.role_id) != org_id:
                return Error(
                    ErrorCode.VALIDATION_ERROR,
                    f"Role {wp.role_id} does not belong to this organization",
                )
        return None
