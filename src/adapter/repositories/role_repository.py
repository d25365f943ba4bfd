import logging
from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.role_repository import IRoleRepository, RoleNameConflictError
from src.domain.entities import Role

logger = logging.getLogger(__name__)


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, role_id: UUID) -> Optional[Role]:
        """Get live role by ID"""
        stmt = select(Role).where(Role.id == role_id, col(Role.deleted_at).is_(None))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, role_ids: Iterable[UUID]) -> List[Role]:
        """Get all live roles whose ID is in the given set"""
        ids = list(set(role_ids))
        if not ids:
            return []
        stmt = select(Role).where(col(Role.id).in_(ids), col(Role.deleted_at).is_(None))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_org_and_name(self, org_id: UUID, name: str) -> Optional[Role]:
        """Get role by organization and name, deleted roles included"""
        stmt = select(Role).where(Role.org_id == org_id, Role.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_org(self, org_id: UUID) -> List[Role]:
        """Get all live roles of an organization in a stable order"""
        stmt = (
            select(Role)
            .where(Role.org_id == org_id, col(Role.deleted_at).is_(None))
            .order_by(Role.created_at, Role.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, role: Role) -> Role:
        """Create a new role"""
        await self._write(role)
        await self.session.refresh(role)
        return role

    async def update(self, role: Role) -> Role:
        """Update existing role"""
        await self._write(role)
        await self.session.refresh(role)
        return role

    async def _write(self, role: Role) -> None:
        # Savepoint keeps the outer transaction usable when the name index rejects the row
        org_id, name = role.org_id, role.name
        try:
            async with self.session.begin_nested():
                self.session.add(role)
                await self.session.flush([role])
        except IntegrityError as exc:
            logger.info(f"Role write rejected by store: {exc.orig}")
            raise RoleNameConflictError(org_id, name) from exc
