from typing import Iterable, List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.workspace_repository import IWorkspaceRepository
from src.domain.entities import Workspace


class WorkspaceRepository(IWorkspaceRepository):
    """Workspace repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, workspace_id: UUID) -> Optional[Workspace]:
        """Get workspace by ID"""
        stmt = select(Workspace).where(Workspace.id == workspace_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, workspace_ids: Iterable[UUID]) -> List[Workspace]:
        """Get all workspaces whose ID is in the given set"""
        ids = list(set(workspace_ids))
        if not ids:
            return []
        stmt = select(Workspace).where(col(Workspace.id).in_(ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        self.session.add(workspace)
        await self.session.flush()
        await self.session.refresh(workspace)
        return workspace
