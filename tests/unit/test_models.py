"""Tests for database models."""

import pytest
from sqlalchemy import select

from src.auth.service import AuthenticationService
from src.db.models import (
    Candidate,
    Company,
    Role,
    RoleType,
    User,
    UserType,
    role_description,
)
from src.db.repositories.user import UserRepository


class TestRoleModel:
    """Tests for Role model."""

    def test_role_types(self):
        """Test role type enum."""
        assert RoleType.ROLE_ADMIN.value == "ROLE_ADMIN"
        assert RoleType.ROLE_COMPANY.value == "ROLE_COMPANY"
        assert RoleType.ROLE_CANDIDATE.value == "ROLE_CANDIDATE"

    def test_role_description(self):
        """Test description is derived from the name without its prefix."""
        assert role_description("ROLE_COMPANY") == "Role for company"
        assert role_description("ROLE_CANDIDATE") == "Role for candidate"
        assert role_description("RECRUITER") == "Role for recruiter"


class TestUserVariants:
    """Tests for Company and Candidate models."""

    def test_company_discriminator(self):
        """Test a new company carries its variant tag before flush."""
        company = Company(
            email="c@example.com",
            first_name="John",
            last_name="Doe",
            company_name="Acme",
            industry="Tech",
        )

        assert company.user_type == UserType.COMPANY.value
        assert isinstance(company, User)

    def test_candidate_discriminator(self):
        """Test a new candidate carries its variant tag before flush."""
        candidate = Candidate(email="j@example.com", first_name="Jane", last_name="Doe")

        assert candidate.user_type == UserType.CANDIDATE.value

    def test_role_names(self):
        """Test role names are read from assigned roles."""
        candidate = Candidate(
            email="j@example.com",
            first_name="Jane",
            last_name="Doe",
            roles=[Role(name="ROLE_CANDIDATE")],
        )

        assert candidate.role_names == ["ROLE_CANDIDATE"]

    @pytest.mark.parametrize(
        "flag",
        ["active", "enabled", "account_non_expired", "account_non_locked", "credentials_non_expired"],
    )
    def test_is_usable_requires_every_flag(self, flag):
        """Test any cleared status flag makes the account unusable."""
        flags = {
            "active": True,
            "enabled": True,
            "account_non_expired": True,
            "account_non_locked": True,
            "credentials_non_expired": True,
        }
        assert Candidate(**flags).is_usable is True

        flags[flag] = False
        assert Candidate(**flags).is_usable is False


class TestCompanyMembers:
    """Tests for the company member collection."""

    @pytest.mark.asyncio
    async def test_members_are_read_back(self, session_factory, company_request, candidate_request):
        """Test members saved on a company load again in a fresh session."""
        async with session_factory() as db:
            service = AuthenticationService(db)
            await service.register_company(company_request)
            await service.register_candidate(candidate_request)
            await db.commit()

        async with session_factory() as db:
            users = UserRepository(db)
            company = await users.get_by_email("company@test.com")
            candidate = await users.get_by_email("candidate@test.com")
            assert company.members == []

            company.members.append(candidate)
            await db.commit()

        async with session_factory() as db:
            company = await UserRepository(db).get_by_email("company@test.com")

            assert [member.email for member in company.members] == ["candidate@test.com"]
            assert isinstance(company.members[0], Candidate)

    @pytest.mark.asyncio
    async def test_removing_member_keeps_user(self, session_factory, company_request, candidate_request):
        async with session_factory() as db:
            service = AuthenticationService(db)
            await service.register_company(company_request)
            await service.register_candidate(candidate_request)
            await db.commit()

        async with session_factory() as db:
            users = UserRepository(db)
            company = await users.get_by_email("company@test.com")
            company.members.append(await users.get_by_email("candidate@test.com"))
            await db.commit()

        async with session_factory() as db:
            company = await UserRepository(db).get_by_email("company@test.com")
            company.members.clear()
            await db.commit()

        async with session_factory() as db:
            users = UserRepository(db)
            company = await users.get_by_email("company@test.com")

            assert company.members == []
            assert await users.get_by_email("candidate@test.com") is not None


class TestAuditColumns:
    """Tests for storage-managed audit fields."""

    @pytest.mark.asyncio
    async def test_insert_sets_audit_fields(self, db):
        """Test created/updated timestamps, version and active flag on insert."""
        role = Role(name="ROLE_TEST", description="Role for test")
        db.add(role)
        await db.flush()

        assert role.id is not None
        assert role.created_at is not None
        assert role.updated_at is not None
        assert role.version == 1
        assert role.active is True

    @pytest.mark.asyncio
    async def test_update_bumps_version(self, db):
        """Test every update increments the version and keeps created_at."""
        role = Role(name="ROLE_TEST", description="Role for test")
        db.add(role)
        await db.flush()
        created_at = role.created_at

        role.description = "Changed"
        await db.flush()

        assert role.version == 2
        assert role.created_at == created_at
        assert role.updated_at >= created_at

    @pytest.mark.asyncio
    async def test_polymorphic_load(self, db):
        """Test querying the base returns the concrete variant."""
        db.add(
            Company(
                email="c@example.com",
                first_name="John",
                last_name="Doe",
                password_hash="x",
                phone_number="+1234567890",
                company_name="Acme",
                industry="Tech",
            )
        )
        await db.flush()
        db.expunge_all()

        result = await db.execute(select(User).where(User.email == "c@example.com"))
        user = result.scalar_one()

        assert isinstance(user, Company)
        assert user.company_name == "Acme"
        assert user.verified is False
