from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from uuid import UUID

from src.domain.entities import Role


class RoleNameConflictError(Exception):
    """Role write violated the per-organization name uniqueness"""

    def __init__(self, org_id: UUID, name: str):
        self.org_id = org_id
        self.name = name
        super().__init__(f"Role name '{name}' already used in organization {org_id}")


class IRoleRepository(ABC):
    """
    Role repository interface - application layer

    Lookups by ID and listings skip deleted roles; grants that reference a
    deleted role therefore resolve to nothing.
    """

    @abstractmethod
    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get live role by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, role_ids: Iterable[UUID]) -> List[Role]:
        """Get all live roles whose ID is in the given set"""
        pass

    @abstractmethod
    async def get_by_org_and_name(self, org_id: UUID, name: str) -> Optional[Role]:
        """Get role by organization and name, deleted roles included"""
        pass

    @abstractmethod
    async def list_by_org(self, org_id: UUID) -> List[Role]:
        """Get all live roles of an organization in a stable order"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role; raises RoleNameConflictError on a duplicate name"""
        pass

    @abstractmethod
    async def update(self, role: Role) -> Role:
        """Update existing role; raises RoleNameConflictError on a duplicate name"""
        pass
