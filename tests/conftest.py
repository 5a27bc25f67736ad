"""Pytest configuration and fixtures."""

import os

# Set test environment before any src module reads settings
os.environ["APP_ENV"] = "development"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEFAULT_ROLES"] = "false"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.api.schemas import RegisterCandidateRequest, RegisterCompanyRequest  # noqa: E402
from src.db.session import create_engine, create_session_factory, init_db  # noqa: E402

VALID_PASSWORD = "Test123@password"


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh SQLite database per test."""
    test_engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test database."""
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def db(session_factory):
    """Database session; uncommitted work is discarded at teardown."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client for the app, wired to the test database."""
    from src.db.session import get_db
    from src.main import app

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def company_payload():
    """Company registration body as sent over HTTP."""
    return {
        "companyName": "Test Company",
        "firstName": "John",
        "lastName": "Doe",
        "email": "company@test.com",
        "password": VALID_PASSWORD,
        "phoneNumber": "+1234567890",
        "industry": "Technology",
        "website": "https://testcompany.com",
    }


@pytest.fixture
def candidate_payload():
    """Candidate registration body as sent over HTTP."""
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "candidate@test.com",
        "password": VALID_PASSWORD,
        "phoneNumber": "+1234567890",
        "skills": "Python, FastAPI",
        "currentPosition": "Software Engineer",
    }


@pytest.fixture
def company_request(company_payload):
    return RegisterCompanyRequest(**company_payload)


@pytest.fixture
def candidate_request(candidate_payload):
    return RegisterCandidateRequest(**candidate_payload)
