"""Pydantic schemas for API requests and responses.

JSON bodies use camelCase names (``firstName``) except the token fields,
which keep their OAuth-style snake_case names (``access_token``). Python code
uses snake_case throughout; both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict, Field

TOKEN_TYPE = "Bearer"


class CamelModel(BaseModel):
    """Base schema accepting either alias or field name."""

    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Requests
# ============================================================================


class LoginRequest(CamelModel):
    """User login request."""

    email: str
    password: str


class RegisterCompanyRequest(CamelModel):
    """Company registration request."""

    company_name: str = Field(alias="companyName")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    password: str
    phone_number: str = Field(alias="phoneNumber")
    industry: str
    website: str | None = None
    description: str | None = None
    size: str | None = None
    location: str | None = None


class RegisterCandidateRequest(CamelModel):
    """Candidate registration request."""

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    password: str
    phone_number: str = Field(alias="phoneNumber")
    bio: str | None = None
    skills: str | None = None
    current_position: str | None = Field(default=None, alias="currentPosition")
    education: str | None = None
    experience: str | None = None
    resume_url: str | None = Field(default=None, alias="resumeUrl")
    linkedin_url: str | None = Field(default=None, alias="linkedinUrl")
    github_url: str | None = Field(default=None, alias="githubUrl")
    portfolio_url: str | None = Field(default=None, alias="portfolioUrl")


# ============================================================================
# Responses
# ============================================================================


class AuthenticationResponse(CamelModel):
    """Token response for login and registration."""

    access_token: str
    refresh_token: str
    token_type: str = TOKEN_TYPE
    expires_in: int  # seconds
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    role: str | None
    user_type: str = Field(alias="userType")


class UserProfileResponse(CamelModel):
    """Current user profile."""

    id: str
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    phone_number: str = Field(alias="phoneNumber")
    user_type: str = Field(alias="userType")
    roles: list[str]
    active: bool
