"""
Check Organization Access Use Case
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import OrgAccessResponse


class CheckOrgAccessUseCase:
    """
    Coarse membership test: does the principal hold any grant in the organization?

    Independent of any action; used to gate whether an organization's pages
    are visible at all.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, principal_id: UUID, org_id: UUID) -> Result[OrgAccessResponse]:
        async with self.uow:
            has_access = await self.uow.permissions.has_any_grant(principal_id, org_id)
            return Return.ok(OrgAccessResponse(has_access=has_access))
