"""
Access Gateway

The only entry point route handlers use. Every call carries the caller's
identity; mutations are authorised with the permission engine itself
before they reach a use case.
"""

import logging
from datetime import timedelta
from typing import Awaitable, Callable, Iterable, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import InterfaceError, OperationalError

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateInvitationUseCase,
    HasPendingInvitationUseCase,
    InvitationListResponse,
    InvitationResponse,
    ListInvitationsUseCase,
    ListMyPendingInvitationsUseCase,
    MyInvitationListResponse,
    PendingInvitationResponse,
    RevokeInvitationResponse,
    RevokeInvitationUseCase,
    WorkspaceRoleGrant,
)
from src.app.use_cases.organizations import (
    CreateOrganizationUseCase,
    CreateWorkspaceUseCase,
    OrganizationResponse,
    WorkspaceResponse,
)
from src.app.use_cases.permissions import (
    AccessDecision,
    AssignRoleUseCase,
    CheckAccessUseCase,
    CheckOrgAccessUseCase,
    EffectiveActionsResponse,
    GetEffectiveActionsUseCase,
    ListPermissionsUseCase,
    OrgAccessResponse,
    PermissionListResponse,
    PermissionResponse,
    RevokePermissionResponse,
    RevokePermissionUseCase,
)
from src.app.use_cases.roles import (
    CreateRoleUseCase,
    DeleteRoleResponse,
    DeleteRoleUseCase,
    GetRoleUseCase,
    ListRolesUseCase,
    RoleListResponse,
    RoleResponse,
    UpdateRoleUseCase,
)
from src.domain.base import utcnow
from src.domain.entities import (
    ErrorCode,
    ObjectType,
    PermissionAction,
    Principal,
    PrincipalType,
)

logger = logging.getLogger(__name__)

DEFAULT_INVITATION_TTL = timedelta(days=7)


class AccessGateway:
    """
    Caller-bound facade over the permission engine and invitation lifecycle.

    - check_access never distinguishes "object does not exist" from "no access"
    - assign/revoke grants, role and workspace management need `manage`
    - invitation management needs `invite` on the organization
    - store connectivity failures come back as UNAVAILABLE; nothing is retried here
    """

    def __init__(
        self,
        uow: UnitOfWork,
        principal: Principal,
        invitation_ttl: timedelta = DEFAULT_INVITATION_TTL,
        clock: Callable = utcnow,
    ):
        self.uow = uow
        self.principal = principal
        self.invitation_ttl = invitation_ttl
        self.clock = clock

    # ------------------------------------------------------------------
    # Permission checks
    # ------------------------------------------------------------------

    async def check_access(
        self, object_type: ObjectType, object_id: UUID, action: PermissionAction
    ) -> Result[AccessDecision]:
        result = await self._guard(
            CheckAccessUseCase(self.uow).execute(
                self.principal.id, object_type, object_id, action
            )
        )
        if result.is_err() and result.error.code == ErrorCode.NOT_FOUND:
            return Return.ok(AccessDecision(granted=False))
        return result

    async def check_org_access(self, org_id: UUID) -> Result[OrgAccessResponse]:
        return await self._guard(
            CheckOrgAccessUseCase(self.uow).execute(self.principal.id, org_id)
        )

    async def get_effective_actions(
        self, object_type: ObjectType, object_id: UUID
    ) -> Result[EffectiveActionsResponse]:
        result = await self._guard(
            GetEffectiveActionsUseCase(self.uow).execute(
                self.principal.id, object_type, object_id
            )
        )
        if result.is_err() and result.error.code == ErrorCode.NOT_FOUND:
            return Return.ok(EffectiveActionsResponse(actions=[]))
        return result

    # ------------------------------------------------------------------
    # Grants
    # ------------------------------------------------------------------

    async def assign_role(
        self,
        org_id: UUID,
        principal_type: PrincipalType,
        principal_id: UUID,
        role_id: UUID,
        object_type: ObjectType,
        object_id: Optional[UUID] = None,
    ) -> Result[PermissionResponse]:
        target_id = object_id if object_type == ObjectType.workspace else org_id
        denied = await self._authorize(object_type, target_id, PermissionAction.manage)
        if denied:
            return Return.err(denied)
        return await self._guard(
            AssignRoleUseCase(self.uow).execute(
                org_id,
                principal_type,
                principal_id,
                role_id,
                object_type,
                object_id,
                actor_id=self.principal.id,
            )
        )

    async def revoke_permission(
        self, org_id: UUID, permission_id: UUID
    ) -> Result[RevokePermissionResponse]:
        denied = await self._authorize_org(org_id, PermissionAction.manage)
        if denied:
            return Return.err(denied)
        return await self._guard(
            RevokePermissionUseCase(self.uow).execute(
                org_id, permission_id, actor_id=self.principal.id
            )
        )

    async def list_permissions(
        self,
        org_id: UUID,
        object_type: Optional[ObjectType] = None,
        object_id: Optional[UUID] = None,
    ) -> Result[PermissionListResponse]:
        if object_type == ObjectType.workspace and object_id is not None:
            denied = await self._authorize(object_type, object_id, PermissionAction.manage)
        else:
            denied = await self._authorize_org(org_id, PermissionAction.manage)
        if denied:
            return Return.err(denied)
        return await self._guard(
            ListPermissionsUseCase(self.uow).execute(org_id, object_type, object_id)
        )

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    async def create_role(
        self,
        org_id: UUID,
        name: str,
        description: Optional[str],
        actions: Iterable[str],
    ) -> Result[RoleResponse]:
        denied = await self._authorize_org(org_id, PermissionAction.manage)
        if denied:
            return Return.err(denied)
        return await self._guard(
            CreateRoleUseCase(self.uow).execute(
                org_id, name, description, actions, actor_id=self.principal.id
            )
        )

    async def get_role(self, role_id: UUID) -> Result[RoleResponse]:
        result = await self._guard(GetRoleUseCase(self.uow).execute(role_id))
        if result.is_err():
            return result

        membership = await self.check_org_access(UUID(result.value.org_id))
        if membership.is_err():
            return membership
        if not membership.value.has_access:
            return Return.err(Error(ErrorCode.NOT_FOUND, "Role not found"))
        return result

    async def list_roles(self, org_id: UUID) -> Result[RoleListResponse]:
        membership = await self.check_org_access(org_id)
        if membership.is_err():
            return membership
        if not membership.value.has_access:
            return Return.err(
                Error(ErrorCode.FORBIDDEN, "You are not a member of this organization")
            )
        return await self._guard(ListRolesUseCase(self.uow).execute(org_id))

    async def update_role(
        self,
        role_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        actions: Optional[Iterable[str]] = None,
    ) -> Result[RoleResponse]:
        role = await self.get_role(role_id)
        if role.is_err():
            return role

        denied = await self._authorize_org(UUID(role.value.org_id), PermissionAction.manage)
        if denied:
            return Return.err(denied)
        return await self._guard(
            UpdateRoleUseCase(self.uow).execute(
                role_id, name, description, actions, actor_id=self.principal.id
            )
        )

    async def delete_role(self, role_id: UUID) -> Result[DeleteRoleResponse]:
        role = await self.get_role(role_id)
        if role.is_err():
            return role

        denied = await self._authorize_org(UUID(role.value.org_id), PermissionAction.manage)
        if denied:
            return Return.err(denied)
        return await self._guard(
            DeleteRoleUseCase(self.uow).execute(role_id, actor_id=self.principal.id)
        )

    # ------------------------------------------------------------------
    # Onboarding
    # ------------------------------------------------------------------

    async def create_organization(self, name: str) -> Result[OrganizationResponse]:
        return await self._guard(
            CreateOrganizationUseCase(self.uow).execute(self.principal, name)
        )

    async def create_workspace(self, org_id: UUID, name: str) -> Result[WorkspaceResponse]:
        denied = await self._authorize_org(org_id, PermissionAction.manage)
        if denied:
            return Return.err(denied)
        return await self._guard(
            CreateWorkspaceUseCase(self.uow).execute(
                org_id, name, actor_id=self.principal.id
            )
        )

    # ------------------------------------------------------------------
    # Invitations
    # ------------------------------------------------------------------

    async def create_invitation(
        self,
        org_id: UUID,
        org_role_id: UUID,
        invitee_email: str,
        workspace_permissions: Sequence[WorkspaceRoleGrant] = (),
        ttl: Optional[timedelta] = None,
    ) -> Result[InvitationResponse]:
        denied = await self._authorize_org(org_id, PermissionAction.invite)
        if denied:
            return Return.err(denied)
        return await self._guard(
            CreateInvitationUseCase(self.uow, clock=self.clock).execute(
                org_id,
                org_role_id,
                self.principal.id,
                invitee_email,
                list(workspace_permissions),
                ttl if ttl is not None else self.invitation_ttl,
            )
        )

    async def list_invitations(self, org_id: UUID) -> Result[InvitationListResponse]:
        denied = await self._authorize_org(org_id, PermissionAction.invite)
        if denied:
            return Return.err(denied)
        return await self._guard(
            ListInvitationsUseCase(self.uow, clock=self.clock).execute(org_id)
        )

    async def revoke_invitation(
        self, org_id: UUID, invitation_id: UUID
    ) -> Result[RevokeInvitationResponse]:
        denied = await self._authorize_org(org_id, PermissionAction.invite)
        if denied:
            return Return.err(denied)
        return await self._guard(
            RevokeInvitationUseCase(self.uow, clock=self.clock).execute(
                org_id, invitation_id, actor_id=self.principal.id
            )
        )

    async def has_pending_invitation(self, org_id: UUID) -> Result[PendingInvitationResponse]:
        return await self._guard(
            HasPendingInvitationUseCase(self.uow, clock=self.clock).execute(
                self.principal, org_id
            )
        )

    async def list_my_pending_invitations(self) -> Result[MyInvitationListResponse]:
        return await self._guard(
            ListMyPendingInvitationsUseCase(self.uow, clock=self.clock).execute(self.principal)
        )

    async def accept_invitation(self, invitation_id: UUID) -> Result[AcceptInvitationResponse]:
        return await self._guard(
            AcceptInvitationUseCase(self.uow, clock=self.clock).execute(
                invitation_id, self.principal
            )
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _authorize_org(self, org_id: UUID, action: PermissionAction) -> Optional[Error]:
        return await self._authorize(ObjectType.organization, org_id, action)

    async def _authorize(
        self, object_type: ObjectType, object_id: Optional[UUID], action: PermissionAction
    ) -> Optional[Error]:
        """Return a FORBIDDEN error unless the caller holds `action` on the object."""
        if object_id is None:
            return Error(ErrorCode.VALIDATION_ERROR, f"A {object_type.value} ID is required")

        decision = await self.check_access(object_type, object_id, action)
        if decision.is_err():
            return decision.error
        if not decision.value.granted:
            logger.info(
                f"Principal {self.principal.id} lacks {action.value} "
                f"on {object_type.value} {object_id}"
            )
            return Error(
                ErrorCode.FORBIDDEN,
                f"You do not have the '{action.value}' permission on this {object_type.value}",
            )
        return None

    async def _guard(self, operation: Awaitable[Result]) -> Result:
        try:
            return await operation
        except (OperationalError, InterfaceError) as exc:
            logger.error(f"Permission store unavailable: {exc}")
            return Return.err(
                Error(ErrorCode.UNAVAILABLE, "Permission store unavailable, retry later")
            )
