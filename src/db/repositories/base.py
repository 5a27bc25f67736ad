"""Base repository with lookup and soft delete."""

from typing import Generic, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with lookup by id and soft delete.

    Models handled here carry the audit columns (``id``, ``created_at``,
    ``updated_at``, ``version``, ``active``). Records are never deleted;
    ``deactivate`` clears the ``active`` flag instead.

    Example:
        class RoleRepository(BaseRepository[Role]):
            def __init__(self, db: AsyncSession):
                super().__init__(Role, db)

            async def get_by_name(self, name: str) -> Role | None:
                result = await self.db.execute(
                    select(Role).where(Role.name == name)
                )
                return result.scalar_one_or_none()
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    async def get(self, id: UUID) -> ModelType | None:
        """Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity if found, None otherwise
        """
        result = await self.db.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def deactivate(self, id: UUID) -> bool:
        """Soft-delete an entity by clearing its ``active`` flag.

        Args:
            id: Entity ID

        Returns:
            True if deactivated, False if not found
        """
        obj = await self.get(id)
        if not obj:
            return False

        obj.active = False
        await self.db.flush()
        return True
