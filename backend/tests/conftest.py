"""
Pet Adoption API — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite file (aiosqlite driver) with the
       tables created from Base.metadata, so the real store gateway and
       transactions are exercised without a PostgreSQL server.

Fixture Hierarchy (all function-scoped):
    engine                  fresh SQLite database under tmp_path
    └── store               RecordStore over that engine
        ├── services        the same wiring the app factory uses
        │   ├── make_pet
        │   └── make_application
        └── test_client     HTTPX AsyncClient over create_app(store=store)
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

import adoption_api.models  # noqa: E402,F401
from adoption_api.config import Settings  # noqa: E402
from adoption_api.database import Base, build_engine  # noqa: E402
from adoption_api.dependencies import build_services  # noqa: E402
from adoption_api.schemas.application import ApplicationCreate  # noqa: E402
from adoption_api.schemas.pet import PetCreate  # noqa: E402
from adoption_api.store import RecordStore  # noqa: E402


@pytest.fixture
def test_settings() -> Settings:
    """Settings with retry waits disabled so transient-failure tests run instantly."""
    return Settings(environment="test", retry_min_wait=0, retry_max_wait=0)


@pytest_asyncio.fixture
async def engine(tmp_path, test_settings):
    engine = build_engine(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'adoption.db'}",
        config=test_settings,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(engine, test_settings) -> RecordStore:
    return RecordStore(engine, config=test_settings)


@pytest.fixture
def services(store):
    return build_services(store)


@pytest.fixture
def make_pet(services):
    """
    Factory for stored pets.

    Usage:
        pet = await make_pet(name="Mittens", type="cat")
    """

    async def _make(**overrides):
        data = {"name": "Rex", "type": "dog", "breed": "Labrador", "age": 3}
        data.update(overrides)
        return await services.pets.create(PetCreate(**data))

    return _make


@pytest.fixture
def make_application(services):
    """Factory for stored applications against an existing pet."""

    async def _make(pet_id, **overrides):
        data = {
            "pet_id": pet_id,
            "applicant_name": "Jane Doe",
            "applicant_email": "jane@example.com",
            "applicant_phone": "555-0100",
        }
        data.update(overrides)
        return await services.applications.create(ApplicationCreate(**data))

    return _make


def _client_for(store: RecordStore, config: Settings) -> AsyncClient:
    from adoption_api.main import create_app

    app = create_app(store=store, config=config)
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def test_client(store, test_settings) -> AsyncGenerator[AsyncClient, None]:
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with _client_for(store, test_settings) as client:
        yield client


@pytest_asyncio.fixture
async def dev_client(store) -> AsyncGenerator[AsyncClient, None]:
    """Client for an app running with ENVIRONMENT=development (stack traces on)."""
    async with _client_for(store, Settings(environment="development")) as client:
        yield client
