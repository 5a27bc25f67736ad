"""Password hashing.

Hashes are bcrypt strings (``$2b$<cost>$<salt><digest>``). The cost and salt
travel inside each hash, so raising ``bcrypt_rounds`` later keeps every
existing hash verifiable.
"""

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext

from src.config import settings

# Password hashing context using bcrypt
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt.

    Args:
        password: The plain text password to hash

    Returns:
        The hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password in constant time.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unrecognized or corrupted hash
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verification."""
    pwd_context.dummy_verify()


def needs_rehash(hashed_password: str) -> bool:
    """Whether a hash was produced with outdated parameters."""
    return pwd_context.needs_update(hashed_password)


# bcrypt is deliberately slow; keep it off the event loop.


async def hash_password_async(password: str) -> str:
    """Hash a password in the threadpool."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify a password in the threadpool."""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


async def dummy_verify_async() -> None:
    """Run a dummy verification in the threadpool."""
    await run_in_threadpool(dummy_verify)
