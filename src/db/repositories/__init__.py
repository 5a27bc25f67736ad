"""Repository layer for database operations."""

from src.db.repositories.base import BaseRepository
from src.db.repositories.role import RoleRepository
from src.db.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "RoleRepository",
    "UserRepository",
]
