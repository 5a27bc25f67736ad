"""SQLAlchemy database models."""

import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, declared_attr, relationship


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


# ============================================================================
# Enums
# ============================================================================


class RoleType(str, enum.Enum):
    """Known role names. Role rows are created on first use."""

    ROLE_ADMIN = "ROLE_ADMIN"
    ROLE_COMPANY = "ROLE_COMPANY"
    ROLE_CANDIDATE = "ROLE_CANDIDATE"


class UserType(str, enum.Enum):
    """User variant discriminator."""

    COMPANY = "COMPANY"
    CANDIDATE = "CANDIDATE"


ROLE_PREFIX = "ROLE_"


def role_description(name: str) -> str:
    """Derive a role description from its name ("ROLE_COMPANY" -> "Role for company")."""
    if name.startswith(ROLE_PREFIX):
        name = name[len(ROLE_PREFIX):]
    return f"Role for {name.lower()}"


# ============================================================================
# Mixins
# ============================================================================


class AuditMixin:
    """Identifier, audit timestamps, optimistic version and soft-delete flag.

    ``created_at`` is written once on INSERT. ``updated_at`` and ``version``
    are bumped by the storage layer on every UPDATE flush; a stale ``version``
    makes the flush fail with ``StaleDataError`` instead of overwriting.
    """

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )
    version = Column(Integer, nullable=False)
    active = Column(Boolean, nullable=False, default=True)

    @declared_attr.directive
    def __mapper_args__(cls) -> dict:
        return {"version_id_col": cls.version}


# ============================================================================
# Association tables
# ============================================================================


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", UUID(as_uuid=True), ForeignKey("users.id"), primary_key=True),
    Column("role_id", UUID(as_uuid=True), ForeignKey("roles.id"), primary_key=True),
)

# Organizational grouping only: removing a company member never deletes the user.
company_members = Table(
    "company_members",
    Base.metadata,
    Column("company_id", UUID(as_uuid=True), ForeignKey("companies.id"), primary_key=True),
    Column("user_id", UUID(as_uuid=True), ForeignKey("users.id"), primary_key=True),
)


# ============================================================================
# Models
# ============================================================================


class Role(AuditMixin, Base):
    """Named authorization grant. Names are unique across the store."""

    __tablename__ = "roles"

    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(255))

    def __repr__(self) -> str:
        return f"<Role {self.name}>"


class User(AuditMixin, Base):
    """Fields shared by every user variant.

    Variants live in their own tables (joined inheritance) keyed by the
    ``user_type`` discriminator. Every query for ``User`` loads the variant
    columns eagerly so instances are usable outside the async session.
    """

    __tablename__ = "users"

    user_type = Column(String(20), nullable=False)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    phone_number = Column(String(20), nullable=False)

    # Account status
    enabled = Column(Boolean, nullable=False, default=True)
    account_non_expired = Column(Boolean, nullable=False, default=True)
    account_non_locked = Column(Boolean, nullable=False, default=True)
    credentials_non_expired = Column(Boolean, nullable=False, default=True)

    # Latest refresh token; overwritten on every login/registration
    refresh_token = Column(String(1000), nullable=True)

    # Relationships
    roles = relationship("Role", secondary=user_roles, lazy="selectin")

    @declared_attr.directive
    def __mapper_args__(cls) -> dict:
        return {
            "version_id_col": cls.version,
            "polymorphic_on": cls.user_type,
            "with_polymorphic": "*",
        }

    @property
    def role_names(self) -> list[str]:
        """Names of assigned roles."""
        return [role.name for role in self.roles]

    @property
    def is_usable(self) -> bool:
        """Whether every account status flag allows sign-in."""
        return bool(
            self.active
            and self.enabled
            and self.account_non_expired
            and self.account_non_locked
            and self.credentials_non_expired
        )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.email}>"


class Company(User):
    """Company account."""

    __tablename__ = "companies"

    id = Column(UUID(as_uuid=True), ForeignKey("users.id"), primary_key=True)

    company_name = Column(String(255), nullable=False)
    industry = Column(String(255), nullable=False)
    website = Column(String(500))
    description = Column(String(1000))
    size = Column(String(50))
    location = Column(String(255))
    verified = Column(Boolean, nullable=False, default=False)

    # Users grouped under this company (weak reference, no lifecycle ownership)
    members = relationship(
        "User",
        secondary=company_members,
        primaryjoin="companies.c.id == company_members.c.company_id",
        secondaryjoin="users.c.id == company_members.c.user_id",
        lazy="selectin",
    )

    __mapper_args__ = {
        "polymorphic_identity": UserType.COMPANY.value,
    }


class Candidate(User):
    """Candidate account."""

    __tablename__ = "candidates"

    id = Column(UUID(as_uuid=True), ForeignKey("users.id"), primary_key=True)

    bio = Column(String(1000))
    skills = Column(String(500))
    current_position = Column(String(255))
    education = Column(String(255))
    experience = Column(String(255))

    # Professional links
    resume_url = Column(String(500))
    linkedin_url = Column(String(500))
    github_url = Column(String(500))
    portfolio_url = Column(String(500))

    available = Column(Boolean, nullable=False, default=True)

    __mapper_args__ = {
        "polymorphic_identity": UserType.CANDIDATE.value,
    }
