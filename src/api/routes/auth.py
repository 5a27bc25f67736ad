"""Authentication API routes."""

from fastapi import APIRouter, Depends

from src.api.dependencies import AuthServiceDep, CurrentUser, require_roles
from src.api.schemas import (
    AuthenticationResponse,
    LoginRequest,
    RegisterCandidateRequest,
    RegisterCompanyRequest,
    UserProfileResponse,
)
from src.auth.roles import ordered_role_names
from src.db.models import RoleType

router = APIRouter()

_TOKEN_RESPONSES = {
    400: {"description": "Invalid input"},
}
_REGISTER_RESPONSES = {
    **_TOKEN_RESPONSES,
    409: {"description": "Email already exists"},
}


@router.post(
    "/login",
    response_model=AuthenticationResponse,
    responses={**_TOKEN_RESPONSES, 401: {"description": "Invalid credentials"}},
)
async def login(request: LoginRequest, service: AuthServiceDep) -> AuthenticationResponse:
    """
    Authenticate with email and password.

    Returns fresh access and refresh tokens; the previous refresh token is replaced.
    """
    return await service.authenticate(request)


@router.post(
    "/register/company",
    response_model=AuthenticationResponse,
    responses=_REGISTER_RESPONSES,
)
async def register_company(
    request: RegisterCompanyRequest, service: AuthServiceDep
) -> AuthenticationResponse:
    """Register a new company account."""
    return await service.register_company(request)


@router.post(
    "/register/candidate",
    response_model=AuthenticationResponse,
    responses=_REGISTER_RESPONSES,
)
async def register_candidate(
    request: RegisterCandidateRequest, service: AuthServiceDep
) -> AuthenticationResponse:
    """Register a new candidate account."""
    return await service.register_candidate(request)


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_info(current_user: CurrentUser) -> UserProfileResponse:
    """Get the current authenticated user's profile."""
    return UserProfileResponse(
        id=str(current_user.id),
        email=current_user.email,
        first_name=current_user.first_name,
        last_name=current_user.last_name,
        phone_number=current_user.phone_number,
        user_type=current_user.user_type,
        roles=ordered_role_names(current_user),
        active=current_user.active,
    )


@router.get(
    "/admin/ping",
    dependencies=[Depends(require_roles(RoleType.ROLE_ADMIN))],
)
async def admin_ping() -> dict:
    """Check that the caller holds the admin role."""
    return {"status": "ok"}
