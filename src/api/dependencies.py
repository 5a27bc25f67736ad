"""FastAPI dependencies."""

from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.exceptions import TokenError
from src.auth.jwt import ROLES_CLAIM, verify_token
from src.auth.service import AuthenticationService
from src.db.models import RoleType, User
from src.db.repositories.user import UserRepository
from src.db.session import get_db

# HTTP Bearer security scheme
security = HTTPBearer(auto_error=False)


async def get_auth_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthenticationService:
    """Dependency to get the authentication service bound to the request session."""
    return AuthenticationService(db)


async def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> dict[str, Any]:
    """
    Dependency to get the verified claims of the Bearer access token.

    Raises HTTPException 401 if the token is missing, invalid or expired.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return verify_token(credentials.credentials, token_type="access")
    except TokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e


async def get_current_user(
    claims: Annotated[dict[str, Any], Depends(get_token_claims)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.

    Raises HTTPException 401 if the token subject no longer maps to an
    active user.
    """
    user = await UserRepository(db).get_by_email(claims["sub"])

    if not user or not user.is_usable:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def require_roles(*role_types: RoleType):
    """
    Dependency factory restricting a route to tokens carrying one of the roles.

    Usage:
        @router.get("/admin", dependencies=[Depends(require_roles(RoleType.ROLE_ADMIN))])
    """
    allowed = {role_type.value for role_type in role_types}

    async def _check_roles(
        claims: Annotated[dict[str, Any], Depends(get_token_claims)],
    ) -> dict[str, Any]:
        if not allowed.intersection(claims.get(ROLES_CLAIM) or []):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient role",
            )
        return claims

    return _check_roles


# Type aliases for dependency injection
AuthServiceDep = Annotated[AuthenticationService, Depends(get_auth_service)]
CurrentUser = Annotated[User, Depends(get_current_user)]
