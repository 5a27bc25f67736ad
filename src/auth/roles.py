"""Role provisioning and role ordering."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import Role, RoleType, User, role_description
from src.db.repositories.role import RoleRepository

logger = logging.getLogger(__name__)

# Highest priority first; decides which role a response reports.
ROLE_PRIORITY: tuple[str, ...] = (
    RoleType.ROLE_ADMIN.value,
    RoleType.ROLE_COMPANY.value,
    RoleType.ROLE_CANDIDATE.value,
)


def _priority_key(name: str) -> tuple[int, str]:
    try:
        return ROLE_PRIORITY.index(name), name
    except ValueError:
        return len(ROLE_PRIORITY), name


def ordered_role_names(user: User) -> list[str]:
    """Role names sorted by priority, unknown names last alphabetically."""
    return sorted(user.role_names, key=_priority_key)


def primary_role(user: User) -> str | None:
    """The single role reported for a user, or None if it has no roles."""
    names = ordered_role_names(user)
    return names[0] if names else None


class RoleProvisioner:
    """Looks up roles by name, creating them on first use.

    Creation relies on the unique constraint on ``roles.name``: when two
    transactions race to create the same role, the loser's INSERT fails inside
    a SAVEPOINT, is rolled back, and the winner's row is read instead.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.roles = RoleRepository(db)

    async def get_or_create(self, role_name: RoleType | str) -> Role:
        """Return the role with this exact name, creating it if absent.

        Args:
            role_name: Role name, e.g. ``RoleType.ROLE_COMPANY``.

        Returns:
            The persisted role.
        """
        name = role_name.value if isinstance(role_name, RoleType) else role_name

        role = await self.roles.get_by_name(name)
        if role is not None:
            return role

        try:
            async with self.db.begin_nested():
                role = Role(name=name, description=role_description(name))
                self.db.add(role)
        except IntegrityError:
            logger.info(f"Role {name} was created concurrently, reusing it")
            role = await self.roles.get_by_name(name)
            if role is None:
                raise
            return role

        logger.info(f"Created role {name}")
        return role

    async def seed_defaults(self) -> list[Role]:
        """Ensure every known role exists."""
        return [await self.get_or_create(role_type) for role_type in RoleType]
