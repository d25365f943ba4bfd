"""
List Roles Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ErrorCode

from .dtos import RoleListResponse, RoleResponse


class ListRolesUseCase:
    """Use case for listing the roles of an organization in a stable order"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, org_id: UUID) -> Result[RoleListResponse]:
        async with self.uow:
            organization = await self.uow.organizations.get_by_id(org_id)
            if organization is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Organization not found"))

            roles = await self.uow.roles.list_by_org(org_id)
            return Return.ok(
                RoleListResponse(roles=[RoleResponse.from_entity(r) for r in roles])
            )
