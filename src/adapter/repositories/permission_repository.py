import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.permission_repository import (
    GrantConflictError,
    IPermissionRepository,
)
from src.domain.entities import ObjectType, Permission

logger = logging.getLogger(__name__)


class PermissionRepository(IPermissionRepository):
    """Permission store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_grants(self, principal_id: UUID, org_id: UUID) -> List[Permission]:
        """Get all grants of a principal within an organization"""
        stmt = select(Permission).where(
            Permission.principal_id == principal_id,
            Permission.org_id == org_id,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def insert_grant(self, grant: Permission) -> Permission:
        """
        Insert a grant idempotently.

        The unique index on (principal_id, role_id, object_type, object_id)
        is the source of truth. The insert runs in a savepoint so that losing
        a race against a concurrent identical insert leaves the surrounding
        transaction usable and the winner's row can be returned.
        """
        existing = await self._find_identical(grant)
        if existing is not None:
            return existing

        try:
            async with self.session.begin_nested():
                self.session.add(grant)
                await self.session.flush([grant])
        except IntegrityError as exc:
            logger.info(f"Grant insertion rejected by store: {exc.orig}")
            existing = await self._find_identical(grant)
            if existing is not None:
                return existing
            raise GrantConflictError(grant) from exc

        await self.session.refresh(grant)
        return grant

    async def list_by_org(
        self,
        org_id: UUID,
        object_type: Optional[ObjectType] = None,
        object_id: Optional[UUID] = None,
    ) -> List[Permission]:
        """Get the grants of an organization, newest first, optionally narrowed to one scope"""
        stmt = select(Permission).where(Permission.org_id == org_id)
        if object_type is not None:
            stmt = stmt.where(Permission.object_type == object_type)
        if object_id is not None:
            stmt = stmt.where(Permission.object_id == object_id)
        stmt = stmt.order_by(Permission.created_at.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_any_grant(self, principal_id: UUID, org_id: UUID) -> bool:
        """Check whether a principal holds at least one grant in an organization"""
        stmt = (
            select(Permission.id)
            .where(
                Permission.principal_id == principal_id,
                Permission.org_id == org_id,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        """Get grant by ID"""
        stmt = select(Permission).where(Permission.id == permission_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete(self, grant: Permission) -> None:
        """Revoke a grant"""
        await self.session.delete(grant)
        await self.session.flush()

    async def _find_identical(self, grant: Permission) -> Optional[Permission]:
        stmt = select(Permission).where(
            Permission.principal_id == grant.principal_id,
            Permission.role_id == grant.role_id,
            Permission.object_type == grant.object_type,
            Permission.object_id == grant.object_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
