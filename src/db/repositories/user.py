"""User repository."""

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import User
from src.db.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User operations.

    Queries return the concrete variant (``Company`` or ``Candidate``).
    Email matching is exact and case-sensitive.
    """

    def __init__(self, db: AsyncSession):
        """Initialize user repository.

        Args:
            db: Database session
        """
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address.

        Args:
            email: User's email address

        Returns:
            User if found, None otherwise
        """
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check whether any user (active or not) already owns an email."""
        return bool(await self.db.scalar(select(exists().where(User.email == email))))

    async def add(self, user: User) -> User:
        """Persist a fully built user instance.

        Raises:
            sqlalchemy.exc.IntegrityError: If a unique constraint is violated.
        """
        self.db.add(user)
        await self.db.flush()
        return user
