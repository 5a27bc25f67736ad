"""Role repository."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Role
from src.db.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Repository for Role operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Role, db)

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by its exact name."""
        result = await self.db.execute(select(Role).where(Role.name == name))
        return result.scalar_one_or_none()

    async def count_by_name(self, name: str) -> int:
        """Count role rows carrying a name (0 or 1 while the constraint holds)."""
        return await self.db.scalar(select(func.count(Role.id)).where(Role.name == name)) or 0
