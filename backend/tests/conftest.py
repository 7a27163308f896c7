"""
UserHub Backend - Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the test suite.
How:   Each test gets its own SQLite file (aiosqlite driver) with the schema
       created from the ORM metadata, an app built around that database,
       and an HTTPX client talking to the app in-process.

Fixture Hierarchy (all function-scoped):
    ├── database:         Database on a temp SQLite file, tables created
    ├── db_session:       AsyncSession on that database (rolled back at teardown)
    ├── mock_db_session:  AsyncMock session for failure paths
    ├── test_settings:    Settings pointing at the temp database
    ├── app:              create_app(test_settings, database)
    ├── test_client:      HTTPX AsyncClient over ASGITransport
    └── sample_user_data: a valid create payload
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Must be set before userhub is imported: the module-level app reads them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from userhub.config import Settings  # noqa: E402
from userhub.database import Database  # noqa: E402
from userhub.main import create_app  # noqa: E402


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'userhub_test.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    """A fresh, fully migrated database per test."""
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """
    A session for service-level tests.

    Not committed: whatever the test writes is rolled back when the
    session closes, including after a failed flush.
    """
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        async def test_list_fails(mock_db_session):
            mock_db_session.execute.side_effect = SQLAlchemyError("boom")
            await UserService(mock_db_session).list_users()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.delete = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def test_settings(database_url):
    return Settings(database_url=database_url, log_level="WARNING", db_create_tables=False)


@pytest.fixture
def app(test_settings, database):
    return create_app(settings=test_settings, database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the app (no server, no lifespan).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/users")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def sample_user_data():
    return {
        "name": "Charlie",
        "age": 30,
        "address": "12 Elm Street",
        "profession": "Engineer",
        "email": "charlie@example.com",
    }
