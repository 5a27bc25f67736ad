"""Registration and login.

Each operation runs inside the caller's database transaction:

    validate -> resolve role (registration) -> hash password -> persist
    -> issue tokens -> respond

Any failure raises a typed ``AuthError`` before the transaction commits, so
no partial user is ever visible.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.schemas import (
    TOKEN_TYPE,
    AuthenticationResponse,
    LoginRequest,
    RegisterCandidateRequest,
    RegisterCompanyRequest,
)
from src.auth.exceptions import AlreadyExistsError, NotFoundError, UnauthorizedError
from src.auth.jwt import generate_access_token, generate_refresh_token
from src.auth.password import (
    dummy_verify_async,
    hash_password_async,
    needs_rehash,
    verify_password_async,
)
from src.auth.roles import RoleProvisioner, primary_role
from src.auth.validation import (
    Validator,
    validate_company_registration,
    validate_email_format,
    validate_password,
    validate_phone_number,
    validate_required,
    validate_url,
)
from src.config import settings
from src.db.models import Candidate, Company, RoleType, User
from src.db.repositories.user import UserRepository

logger = logging.getLogger(__name__)


# ============================================================================
# Credential check
# ============================================================================


@dataclass
class Authenticated:
    """Credentials matched an active account."""

    user: User


@dataclass
class InvalidCredentials:
    """Credentials were rejected. ``reason`` is for logs only."""

    reason: str


async def authenticate_credentials(
    db: AsyncSession, email: str, password: str
) -> Authenticated | InvalidCredentials:
    """Check an email/password pair against the stored hash.

    Unknown emails still pay for one hash verification. Account status flags
    are only consulted once the password matched.
    """
    user = await UserRepository(db).get_by_email(email)
    if user is None:
        await dummy_verify_async()
        return InvalidCredentials("unknown email")

    if not await verify_password_async(password, user.password_hash):
        return InvalidCredentials("wrong password")

    if not user.is_usable:
        return InvalidCredentials("account disabled, locked or expired")

    if needs_rehash(user.password_hash):
        user.password_hash = await hash_password_async(password)
        logger.info(f"Rehashed password for {user.email} with current parameters")

    return Authenticated(user)


# ============================================================================
# Service
# ============================================================================


class AuthenticationService:
    """Registers companies and candidates and signs users in."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserRepository(db)
        self.validator = Validator(db)
        self.roles = RoleProvisioner(db)

    async def register_company(self, request: RegisterCompanyRequest) -> AuthenticationResponse:
        """Register a new company account and sign it in."""
        await self.validator.validate_email(request.email)
        validate_password(request.password)
        validate_phone_number(request.phone_number)
        validate_company_registration(request.company_name, request.industry)
        validate_required(request.first_name, "First name")
        validate_required(request.last_name, "Last name")
        validate_url(request.website, "website")

        role = await self.roles.get_or_create(RoleType.ROLE_COMPANY)

        company = Company(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password_hash=await hash_password_async(request.password),
            phone_number=request.phone_number,
            company_name=request.company_name,
            industry=request.industry,
            website=request.website,
            description=request.description,
            size=request.size,
            location=request.location,
            roles=[role],
            enabled=True,
            account_non_expired=True,
            account_non_locked=True,
            credentials_non_expired=True,
        )
        await self._persist(company)
        logger.info(f"Registered company {company.company_name!r} ({company.email})")

        return await self._issue_tokens(company)

    async def register_candidate(
        self, request: RegisterCandidateRequest
    ) -> AuthenticationResponse:
        """Register a new candidate account and sign it in."""
        await self.validator.validate_email(request.email)
        validate_password(request.password)
        validate_phone_number(request.phone_number)
        validate_required(request.first_name, "First name")
        validate_required(request.last_name, "Last name")

        role = await self.roles.get_or_create(RoleType.ROLE_CANDIDATE)

        candidate = Candidate(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password_hash=await hash_password_async(request.password),
            phone_number=request.phone_number,
            bio=request.bio,
            skills=request.skills,
            current_position=request.current_position,
            education=request.education,
            experience=request.experience,
            resume_url=request.resume_url,
            linkedin_url=request.linkedin_url,
            github_url=request.github_url,
            portfolio_url=request.portfolio_url,
            roles=[role],
            enabled=True,
            account_non_expired=True,
            account_non_locked=True,
            credentials_non_expired=True,
        )
        await self._persist(candidate)
        logger.info(f"Registered candidate {candidate.email}")

        return await self._issue_tokens(candidate)

    async def authenticate(self, request: LoginRequest) -> AuthenticationResponse:
        """Sign in with email and password, rotating the refresh token.

        Raises:
            ValidationError: If the email or password is missing or malformed.
            UnauthorizedError: If the credentials are rejected.
            NotFoundError: If the authenticated email has no backing user.
        """
        validate_required(request.email, "Email")
        validate_email_format(request.email)
        validate_required(request.password, "Password")

        result = await authenticate_credentials(self.db, request.email, request.password)
        if isinstance(result, InvalidCredentials):
            logger.warning(f"Failed login for {request.email}: {result.reason}")
            raise UnauthorizedError("Invalid email or password")

        user = await self.users.get_by_email(request.email)
        if user is None:
            raise NotFoundError("User", "email", request.email)

        logger.info(f"User {user.email} logged in")
        return await self._issue_tokens(user)

    async def _persist(self, user: User) -> None:
        """Insert a new user, turning a lost email race into a conflict."""
        try:
            await self.users.add(user)
        except IntegrityError as e:
            logger.warning(f"Email {user.email} was registered concurrently")
            raise AlreadyExistsError("User", "email", user.email) from e

    async def _issue_tokens(self, user: User) -> AuthenticationResponse:
        """Mint access and refresh tokens, storing the refresh token on the user."""
        access_token = generate_access_token(user)
        refresh_token = generate_refresh_token(user)

        user.refresh_token = refresh_token
        await self.db.flush()

        return AuthenticationResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            token_type=TOKEN_TYPE,
            expires_in=settings.access_token_expire_seconds,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=primary_role(user),
            user_type=user.user_type,
        )
