"""
Get Role Use Case
"""

from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ErrorCode

from .dtos import RoleResponse


class GetRoleUseCase:
    """Use case for reading one role by ID"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, role_id: UUID) -> Result[RoleResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_id(role_id)
            if role is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Role not found"))
            return Return.ok(RoleResponse.from_entity(role))
