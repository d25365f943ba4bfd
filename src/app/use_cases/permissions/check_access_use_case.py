"""
Check Access Use Case

Permission resolution for a (principal, object, action) triple.
"""

import logging
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import access_policy
from src.domain.entities import ErrorCode, ObjectType, PermissionAction

from .dtos import AccessDecision
from .scope import resolve_owning_org

logger = logging.getLogger(__name__)


class CheckAccessUseCase:
    """
    Use case for deciding whether a principal may perform an action on an object.

    Algorithm:
    1. Resolve the organization owning the object (NOT_FOUND if absent)
    2. Fetch every grant of the principal in that organization
    3. Keep grants that match: org-wide grants always, workspace grants only
       for exactly the requested workspace
    4. Granted iff the action belongs to the role of any matching grant
    5. Default deny; there are no deny grants

    Read-only: never commits.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal_id: UUID,
        object_type: ObjectType,
        object_id: UUID,
        action: PermissionAction,
    ) -> Result[AccessDecision]:
        async with self.uow:
            org_id = await resolve_owning_org(self.uow, object_type, object_id)
            if org_id is None:
                return Return.err(
                    Error(ErrorCode.NOT_FOUND, f"{object_type.value.capitalize()} not found")
                )

            grants = await self.uow.permissions.find_grants(principal_id, org_id)
            matching = access_policy.matching_grants(grants, object_type, object_id)
            if not matching:
                logger.debug(
                    f"Denied {action.value} on {object_type.value} {object_id} "
                    f"for {principal_id}: no matching grant"
                )
                return Return.ok(AccessDecision(granted=False))

            roles = await self.uow.roles.get_by_ids({g.role_id for g in matching})
            granted = access_policy.is_granted(
                matching, {r.id: r for r in roles}, org_id, action
            )
            return Return.ok(AccessDecision(granted=granted))
