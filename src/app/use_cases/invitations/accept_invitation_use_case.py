"""
Accept Invitation Use Case

Turns a pending invitation into grants, exactly once.
"""

import logging
from typing import Callable, List, Tuple
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.repositories.permission_repository import GrantConflictError
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.permissions.assign_role_use_case import build_grant
from src.app.use_cases.permissions.dtos import PermissionResponse
from src.domain.base import utcnow
from src.domain.entities import (
    AuditEvent,
    ErrorCode,
    Invitation,
    InvitationStatus,
    ObjectType,
    Permission,
    Principal,
)

from .dtos import AcceptInvitationResponse, WorkspaceRoleGrant
from .expiry import expire_if_past_deadline

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting an invitation.

    Business Rules:
    - Runs as one transaction: either the invitation becomes accepted and
      every grant exists, or nothing changes and it stays pending
    - Expired (or found past its deadline) => INVITATION_EXPIRED, and the
      expiry is persisted
    - Accepted or revoked => ALREADY_PROCESSED
    - The principal's verified email must equal the invitee email => FORBIDDEN
    - The pending -> accepted move is a conditional update; the loser of a
      concurrent acceptance gets ALREADY_PROCESSED
    - Grants: the org role org-wide, then one per workspace permission, in
      order; insertion is idempotent
    """

    def __init__(self, uow: UnitOfWork, clock: Callable = utcnow):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, invitation_id: UUID, principal: Principal
    ) -> Result[AcceptInvitationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Invitation not found"))

            if invitation.status != InvitationStatus.pending:
                return Return.err(self._settled_error(invitation.status))

            if await expire_if_past_deadline(self.uow, invitation, self.clock()):
                await self.uow.commit()
                return Return.err(self._settled_error(InvitationStatus.expired))

            if invitation.status != InvitationStatus.pending:
                # Settled by another request between the read and the expiry attempt
                await self.uow.rollback()
                return Return.err(self._settled_error(invitation.status))

            if principal.normalized_email != invitation.invitee_email.lower():
                logger.warning(
                    f"Principal {principal.id} tried to accept invitation {invitation.id} "
                    f"addressed to another email"
                )
                return Return.err(
                    Error(
                        ErrorCode.FORBIDDEN,
                        "This invitation was sent to a different email address",
                    )
                )

            # Claim the invitation before writing grants so a concurrent
            # acceptance blocks on the row and then fails the condition
            claimed = await self.uow.invitations.transition_status(
                invitation.id, InvitationStatus.pending, InvitationStatus.accepted
            )
            if not claimed:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        ErrorCode.ALREADY_PROCESSED,
                        "This invitation has already been processed",
                    )
                )

            try:
                provisioned = await self._provision_grants(invitation, principal)
            except GrantConflictError as exc:
                await self.uow.rollback()
                return Return.err(Error(ErrorCode.CONFLICT, str(exc)))

            if provisioned.is_err():
                await self.uow.rollback()
                return Return.err(provisioned.error)
            grants = provisioned.value

            audit = AuditEvent(
                org_id=invitation.org_id,
                actor_id=principal.id,
                action="invitation_accepted",
                event_metadata={
                    "invitation_id": str(invitation.id),
                    "grant_ids": [str(g.id) for g in grants],
                },
            )
            await self.uow.audit_events.create(audit)

            await self.uow.commit()

            logger.info(
                f"Invitation {invitation.id} accepted by {principal.id}: {len(grants)} grant(s)"
            )
            return Return.ok(
                AcceptInvitationResponse(
                    invitation_id=str(invitation.id),
                    org_id=str(invitation.org_id),
                    status=InvitationStatus.accepted.value,
                    grants=[PermissionResponse.from_entity(g) for g in grants],
                )
            )

    @staticmethod
    def _settled_error(status: InvitationStatus) -> Error:
        if status == InvitationStatus.expired:
            return Error(ErrorCode.INVITATION_EXPIRED, "This invitation has expired")
        return Error(
            ErrorCode.ALREADY_PROCESSED,
            f"This invitation has already been {status.value}",
        )

    def _planned_grants(self, invitation: Invitation) -> List[Tuple[ObjectType, UUID, UUID]]:
        planned = [(ObjectType.organization, invitation.org_id, invitation.org_role_id)]
        for record in invitation.workspace_permissions:
            wp = WorkspaceRoleGrant.from_record(record)
            planned.append((ObjectType.workspace, wp.workspace_id, wp.role_id))
        return planned

    async def _provision_grants(
        self, invitation: Invitation, principal: Principal
    ) -> Result[List[Permission]]:
        """Insert every grant of the invitation, stopping at the first invalid one."""
        grants = []
        for object_type, object_id, role_id in self._planned_grants(invitation):
            # Roles or workspaces may have changed since the invitation was sent
            built = await build_grant(
                self.uow,
                invitation.org_id,
                principal.kind,
                principal.id,
                role_id,
                object_type,
                object_id,
                created_by=invitation.inviter_id,
            )
            if built.is_err():
                return Return.err(built.error)
            grants.append(await self.uow.permissions.insert_grant(built.value))
        return Return.ok(grants)
