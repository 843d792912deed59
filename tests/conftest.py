"""
Catalog API: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the suite.

Fixture Overview (all function-scoped):
    ├── mock_db_session:  AsyncMock standing in for AsyncSession (unit tests)
    ├── test_settings:    Settings pointing at a temporary SQLite file
    ├── database:         Database with tables created, disposed afterwards
    ├── app:              Fully wired FastAPI app on that database
    └── test_client:      HTTPX AsyncClient talking to `app` in-process
"""

import os

# Must be set before catalog modules are imported: catalog.main builds its
# module-level app from the environment.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalog.config import Settings
from catalog.database import Database
from catalog.main import create_app


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = category
        result = await category_service.delete_category(mock_db_session, category_id, cascade)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_cascade():
    """A CascadeDeleter stand-in whose trigger() records calls."""
    cascade = MagicMock()
    cascade.trigger = AsyncMock(return_value=None)
    return cascade


@pytest.fixture
def sample_category():
    """A category-shaped object as the ORM would return it."""
    category = MagicMock()
    category.id = uuid.uuid4()
    category.name = "Snacks"
    category.description = "Things to nibble"
    return category


# ══════════════════════════════════════════════════════════════════════════
# Database-Backed Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings for a throwaway SQLite database in pytest's tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        log_level="WARNING",
        cascade_mode="background",
    )


@pytest_asyncio.fixture
async def database(test_settings):
    """A Database with the catalog tables created."""
    db = Database(test_settings)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def app(test_settings):
    """
    Provides a FastAPI app bound to a fresh SQLite database.

    ASGITransport does not run the lifespan, so tables are created here and
    pending cascades are drained before the engine is disposed.
    """
    application = create_app(test_settings)
    await application.state.database.create_tables()
    yield application
    await application.state.cascade.drain()
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/category")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
