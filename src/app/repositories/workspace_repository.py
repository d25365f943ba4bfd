from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from src.domain.entities import Workspace


class IWorkspaceRepository(ABC):
    """Workspace repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, workspace_id: UUID) -> Optional[Workspace]:
        """Get workspace by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, workspace_ids: Iterable[UUID]) -> List[Workspace]:
        """Get all workspaces whose ID is in the given set"""
        pass

    @abstractmethod
    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        pass
