from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import ObjectType, Permission


class GrantConflictError(Exception):
    """Grant insertion violated the store's uniqueness constraint"""

    def __init__(self, grant: Permission):
        self.grant = grant
        super().__init__(
            f"Conflicting grant for principal {grant.principal_id} "
            f"role {grant.role_id} on {grant.object_type.value} {grant.object_id}"
        )


class IPermissionRepository(ABC):
    """Permission store interface - application layer"""

    @abstractmethod
    async def find_grants(self, principal_id: UUID, org_id: UUID) -> List[Permission]:
        """Get all grants of a principal within an organization"""
        pass

    @abstractmethod
    async def insert_grant(self, grant: Permission) -> Permission:
        """
        Insert a grant idempotently.

        Returns the stored grant; an identical existing grant is returned
        unchanged. Raises GrantConflictError when the store rejects the row
        and no identical grant explains the rejection.
        """
        pass

    @abstractmethod
    async def list_by_org(
        self,
        org_id: UUID,
        object_type: Optional[ObjectType] = None,
        object_id: Optional[UUID] = None,
    ) -> List[Permission]:
        """Get the grants of an organization, newest first, optionally narrowed to one scope"""
        pass

    @abstractmethod
    async def has_any_grant(self, principal_id: UUID, org_id: UUID) -> bool:
        """Check whether a principal holds at least one grant in an organization"""
        pass

    @abstractmethod
    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        """Get grant by ID"""
        pass

    @abstractmethod
    async def delete(self, grant: Permission) -> None:
        """Revoke a grant"""
        pass
