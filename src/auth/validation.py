"""Registration and login field validation.

Every check either returns silently or raises a ``ValidationError`` subclass
(or ``AlreadyExistsError`` for a taken email). Callers run the checks in
order and stop at the first failure.
"""

import ipaddress
import re
from urllib.parse import urlparse

from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.exceptions import (
    AlreadyExistsError,
    InvalidFormatError,
    MissingFieldError,
    WeakPasswordError,
)
from src.db.repositories.user import UserRepository

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")

PASSWORD_SYMBOLS = "@#$%^&+=!"
PASSWORD_PATTERN = re.compile(
    r"^(?=.*[0-9])(?=.*[a-z])(?=.*[A-Z])(?=.*[@#$%^&+=!])(?=\S+$).{8,}$"
)
# bcrypt only reads the first 72 bytes
MAX_PASSWORD_BYTES = 72

# Optional "+", first digit 1-9, then 7 to 14 digits
PHONE_PATTERN = re.compile(r"^\+?[1-9][0-9]{7,14}$")

URL_FORBIDDEN_PATTERN = re.compile(r"[\s\x00-\x1f\x7f]")
HOST_LABEL_PATTERN = re.compile(r"^(?!-)[A-Za-z0-9-]{1,63}(?<!-)$")


def is_blank(value: str | None) -> bool:
    """Whether a value is None, empty or whitespace only."""
    return value is None or not value.strip()


def validate_email_format(email: str | None) -> None:
    """Check that an email looks like ``local@domain``."""
    if email is None or not EMAIL_PATTERN.fullmatch(email):
        raise InvalidFormatError("Invalid email format", field="email")


def validate_password(password: str | None) -> None:
    """Check password strength and length."""
    if password is None or not PASSWORD_PATTERN.fullmatch(password):
        raise WeakPasswordError(
            "Password must contain at least 8 characters, including uppercase, lowercase, "
            f"numbers and special characters ({PASSWORD_SYMBOLS})",
            field="password",
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise WeakPasswordError(
            f"Password must not be longer than {MAX_PASSWORD_BYTES} bytes",
            field="password",
        )


def validate_phone_number(phone_number: str | None) -> None:
    """Check an international phone number such as ``+1234567890``."""
    if phone_number is None or not PHONE_PATTERN.fullmatch(phone_number):
        raise InvalidFormatError(
            "Invalid phone number format. Please use international format (e.g., +1234567890)",
            field="phone_number",
        )


def validate_required(value: str | None, field_name: str) -> None:
    """Check that a field is present and not blank."""
    if is_blank(value):
        raise MissingFieldError(f"{field_name} is required", field=field_name)


def validate_company_registration(company_name: str | None, industry: str | None) -> None:
    """Check the company-specific required fields."""
    validate_required(company_name, "Company name")
    validate_required(industry, "Industry")


def _is_valid_host(host: str) -> bool:
    """Whether a host is an IP literal or a name made of DNS labels."""
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        pass

    try:
        ascii_host = host.encode("idna").decode("ascii")
    except UnicodeError:
        return False

    labels = ascii_host.removesuffix(".").split(".")
    return all(HOST_LABEL_PATTERN.fullmatch(label) for label in labels)


def validate_url(url: str | None, field_name: str) -> None:
    """Check that a non-blank value parses as a URL with a scheme and a valid host.

    Blank values are accepted. No network access is made.
    """
    if is_blank(url):
        return

    try:
        parsed = urlparse(url)
        # Accessing .port validates the authority section
        parsed.port
    except ValueError:
        parsed = None

    if (
        parsed is None
        or URL_FORBIDDEN_PATTERN.search(url)
        or not parsed.scheme
        or not parsed.netloc
        or not parsed.hostname
        or not _is_valid_host(parsed.hostname)
    ):
        raise InvalidFormatError(f"Invalid {field_name} URL format", field=field_name)


class Validator:
    """Field validation that needs the user store (email uniqueness)."""

    def __init__(self, db: AsyncSession):
        self.users = UserRepository(db)

    async def validate_email(self, email: str | None) -> None:
        """Check email format, then that no user already owns it.

        Raises:
            InvalidFormatError: If the email is malformed.
            AlreadyExistsError: If the exact email is already registered.
        """
        validate_email_format(email)
        if await self.users.exists_by_email(email):
            raise AlreadyExistsError("User", "email", email)
