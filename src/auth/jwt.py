"""JWT token utilities."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from jose import ExpiredSignatureError, JWTError, jwt

from src.auth.exceptions import TokenExpiredError, TokenInvalidError
from src.auth.roles import ordered_role_names
from src.config import settings
from src.db.models import User

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# Claim holding the user's role names
ROLES_CLAIM = "roles"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _encode(payload: dict[str, Any]) -> str:
    return jwt.encode(
        payload,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def create_access_token(
    email: str,
    roles: Iterable[str],
    user_id: uuid.UUID | None = None,
) -> str:
    """Create a new JWT access token.

    The token is self-contained: downstream authorization reads the subject
    and role claims without a store lookup.

    Args:
        email: User's email address, used as the subject.
        roles: Names of the user's roles.
        user_id: Optional user identifier, carried as ``uid``.

    Returns:
        Encoded JWT token string.
    """
    issued_at = _now()
    expire = issued_at + timedelta(minutes=settings.access_token_expire_minutes)

    payload = {
        "sub": email,
        ROLES_CLAIM: list(roles),
        "iat": issued_at,
        "exp": expire,
        "iss": settings.jwt_issuer,
        "type": ACCESS_TOKEN_TYPE,
    }
    if user_id is not None:
        payload["uid"] = str(user_id)

    return _encode(payload)


def create_refresh_token(email: str, roles: Iterable[str]) -> tuple[str, datetime]:
    """Create a new JWT refresh token.

    Every refresh token carries a random ``jti`` so two tokens minted for the
    same user in the same second still differ.

    Args:
        email: User's email address, used as the subject.
        roles: Names of the user's roles.

    Returns:
        Tuple of (token string, expiry datetime).
    """
    issued_at = _now()
    expire = issued_at + timedelta(days=settings.refresh_token_expire_days)

    payload = {
        "sub": email,
        ROLES_CLAIM: list(roles),
        "iat": issued_at,
        "exp": expire,
        "iss": settings.jwt_issuer,
        "jti": uuid.uuid4().hex,
        "type": REFRESH_TOKEN_TYPE,
    }

    return _encode(payload), expire


def verify_token(token: str, token_type: str = ACCESS_TOKEN_TYPE) -> dict[str, Any]:
    """Verify and decode a JWT token.

    Args:
        token: JWT token string to verify.
        token_type: Expected token type ('access' or 'refresh').

    Returns:
        Decoded token payload.

    Raises:
        TokenExpiredError: If the token lifetime has elapsed.
        TokenInvalidError: If token is malformed, badly signed, or wrong type.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except JWTError as e:
        raise TokenInvalidError(f"Invalid token: {e!s}") from e

    # Verify token type
    if payload.get("type") != token_type:
        raise TokenInvalidError(f"Invalid token type. Expected {token_type}.")

    # Verify subject exists
    if not payload.get("sub"):
        raise TokenInvalidError("Token missing subject.")

    return payload


def generate_access_token(user: User) -> str:
    """Create an access token bound to a user's email and roles."""
    return create_access_token(user.email, ordered_role_names(user), user_id=user.id)


def generate_refresh_token(user: User) -> str:
    """Create a refresh token for a user.

    The caller stores it on ``user.refresh_token``, replacing the previous one.
    """
    token, _ = create_refresh_token(user.email, ordered_role_names(user))
    return token
