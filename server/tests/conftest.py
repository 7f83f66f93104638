"""Test configuration and fixtures."""

from datetime import date, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tourguide.core.config import Settings
from tourguide.core.database import Database, get_db
from tourguide.main import create_app
from tourguide.models import UserType
from tourguide.models import *  # noqa: F403 - Import all models
from tourguide.schemas.auth import AuthenticatedUser, RegisterRequest
from tourguide.schemas.tour import CreateTourRequest
from tourguide.services.auth_service import AuthService
from tourguide.services.tour_service import TourService

# Test database URL (in-memory SQLite for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "secret123"


def as_identity(user) -> AuthenticatedUser:
    """Identity a bearer token for ``user`` would carry."""
    return AuthenticatedUser(user_id=user.id, email=user.email, user_type=UserType(user.user_type))


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_settings():
    """Settings for an isolated development-mode application."""
    return Settings(
        database_url=TEST_DATABASE_URL,
        environment="development",
        jwt_secret="test-secret-key-that-is-long-enough-for-hs256",
        create_tables_on_startup=False,
        seed_sample_data=False,
    )


@pytest_asyncio.fixture(scope="function")
async def test_database():
    """Create a test database with every table."""
    database = Database(TEST_DATABASE_URL)
    await database.create_all()

    yield database

    await database.drop_all()
    await database.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_session(test_database):
    """Create a test database session."""
    async with test_database.session() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def test_app(test_settings, test_database, test_session):
    """Create a test FastAPI application bound to the test database."""
    app = create_app(test_settings)
    await app.state.database.dispose()
    app.state.database = test_database

    # Override database dependency
    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    yield app

    # Clean up
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def test_client(test_app):
    """Create a test HTTP client."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _register(session, settings, name: str, email: str, user_type: UserType):
    service = AuthService(session, settings)
    return await service.register(
        RegisterRequest(name=name, email=email, password=TEST_PASSWORD, user_type=user_type)
    )


@pytest_asyncio.fixture
async def guide_account(test_session, test_settings):
    """A registered guide and its bearer token."""
    return await _register(test_session, test_settings, "Gina Guide", "gina@example.com", UserType.GUIDE)


@pytest_asyncio.fixture
async def tourist_account(test_session, test_settings):
    """A registered tourist and its bearer token."""
    return await _register(test_session, test_settings, "Tom Tourist", "tom@example.com", UserType.TOURIST)


@pytest_asyncio.fixture
async def other_tourist_account(test_session, test_settings):
    return await _register(test_session, test_settings, "Olga Other", "olga@example.com", UserType.TOURIST)


@pytest.fixture
def guide(guide_account):
    return as_identity(guide_account[0])


@pytest.fixture
def tourist(tourist_account):
    return as_identity(tourist_account[0])


@pytest.fixture
def guide_headers(guide_account):
    return auth_headers(guide_account[1])


@pytest.fixture
def tourist_headers(tourist_account):
    return auth_headers(tourist_account[1])


@pytest.fixture
def sample_tour_data():
    """Sample tour data for testing."""
    return {
        "title": "Old Town Walking Tour",
        "description": "Two hours through the historic centre with a local guide",
        "base_price": 100.0,
        "max_people": 4,
        "extra_person_price": 20.0,
        "location": "Old Town",
        "duration": "2 hours",
    }


@pytest_asyncio.fixture
async def sample_tour(test_session, guide, sample_tour_data):
    """A tour owned by the guide fixture."""
    return await TourService(test_session).create_tour(CreateTourRequest(**sample_tour_data), guide)


@pytest.fixture
def tour_date():
    return date.today() + timedelta(days=14)


@pytest.fixture
def other_tourist(other_tourist_account):
    return as_identity(other_tourist_account[0])
