"""Application startup tasks."""

import logging

from src.auth.roles import RoleProvisioner
from src.config import settings
from src.db.session import get_session, init_db

logger = logging.getLogger(__name__)


async def seed_default_roles() -> list[str]:
    """Provision every known role.

    Uses the same get-or-create path as registration, so running it any
    number of times (or concurrently from several workers) leaves exactly one
    row per role.

    Returns:
        Names of the roles that now exist.
    """
    async with get_session() as db:
        roles = await RoleProvisioner(db).seed_defaults()
        names = [role.name for role in roles]

    logger.info(f"Default roles ready: {', '.join(names)}")
    return names


async def startup_tasks():
    """Run all startup tasks.

    Called from the FastAPI lifespan in ``src.main``.
    """
    logger.info("Running startup tasks...")

    if settings.database_auto_create:
        await init_db()

    if settings.seed_default_roles:
        await seed_default_roles()

    logger.info("Startup tasks completed")
