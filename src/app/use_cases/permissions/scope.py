"""Resolution of the organization that owns an object scope."""

from typing import Optional
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ObjectType


async def resolve_owning_org(
    uow: UnitOfWork, object_type: ObjectType, object_id: UUID
) -> Optional[UUID]:
    """Return the owning organization ID, or None when the object does not exist."""
    if object_type == ObjectType.workspace:
        workspace = await uow.workspaces.get_by_id(object_id)
        return workspace.organization_id if workspace else None

    organization = await uow.organizations.get_by_id(object_id)
    return organization.id if organization else None
