"""Authentication module for the Worku identity service."""

from src.auth.jwt import (
    create_access_token,
    create_refresh_token,
    generate_access_token,
    generate_refresh_token,
    verify_token,
)
from src.auth.password import hash_password, verify_password

__all__ = [
    "create_access_token",
    "create_refresh_token",
    "generate_access_token",
    "generate_refresh_token",
    "verify_token",
    "hash_password",
    "verify_password",
]
