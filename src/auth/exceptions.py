"""Authentication domain errors.

Each error carries the HTTP status the API layer answers with, so routes
never translate them by hand.
"""

from fastapi import status


class AuthError(Exception):
    """Base class for authentication errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ============================================================================
# Validation
# ============================================================================


class ValidationError(AuthError):
    """A registration or login field is malformed or missing."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class InvalidFormatError(ValidationError):
    """Field does not match its expected format."""


class WeakPasswordError(ValidationError):
    """Password does not meet the strength rules."""


class MissingFieldError(ValidationError):
    """Required field is absent or blank."""


# ============================================================================
# Resources
# ============================================================================


class AlreadyExistsError(AuthError):
    """A unique resource already exists."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, resource: str, field: str, value: object):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} already exists with {field}: '{value}'")


class NotFoundError(AuthError):
    """A resource expected to exist is missing."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, field: str, value: object):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} not found with {field}: '{value}'")


class UnauthorizedError(AuthError):
    """Credentials were rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED


# ============================================================================
# Tokens
# ============================================================================


class TokenError(AuthError):
    """Exception raised for token-related errors."""

    status_code = status.HTTP_401_UNAUTHORIZED


class TokenInvalidError(TokenError):
    """Token is malformed, wrongly signed or of the wrong type."""


class TokenExpiredError(TokenError):
    """Token signature is valid but its lifetime has elapsed."""
