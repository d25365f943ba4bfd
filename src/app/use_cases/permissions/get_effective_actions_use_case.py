"""
Get Effective Actions Use Case

Lists every action a principal holds on one object.
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import access_policy
from src.domain.entities import ErrorCode, ObjectType, PermissionAction

from .dtos import EffectiveActionsResponse
from .scope import resolve_owning_org


class GetEffectiveActionsUseCase:
    """Same matching rules as CheckAccessUseCase, returning the union of actions"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal_id: UUID, object_type: ObjectType, object_id: UUID
    ) -> Result[EffectiveActionsResponse]:
        async with self.uow:
            org_id = await resolve_owning_org(self.uow, object_type, object_id)
            if org_id is None:
                return Return.err(
                    Error(ErrorCode.NOT_FOUND, f"{object_type.value.capitalize()} not found")
                )

            grants = await self.uow.permissions.find_grants(principal_id, org_id)
            matching = access_policy.matching_grants(grants, object_type, object_id)
            roles = await self.uow.roles.get_by_ids({g.role_id for g in matching})
            actions = access_policy.effective_actions(
                matching, {r.id: r for r in roles}, org_id
            )
            return Return.ok(
                EffectiveActionsResponse(actions=PermissionAction.ordered(actions))
            )
