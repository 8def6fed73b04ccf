# tests/conftest.py
"""
Main pytest configuration and shared fixtures for all tests.

This module provides:
- Async test support (pytest-asyncio auto mode)
- Settings override for the test environment
- An in-memory SQLite database per test, with tables created from SQLModel metadata
- A DatabaseManager connected to its own in-memory database
- Factory Boy integration
"""

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from abstract_repository.config.settings import Settings, get_settings
from abstract_repository.infrastructure.database.connection import DatabaseManager

# Registers the test tables on SQLModel.metadata
import tests.models  # noqa: F401


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# Pytest Configuration
# ============================================================================

pytest_plugins = ["tests.factories.fixtures"]


def pytest_configure(config):
    """Configure pytest-asyncio to use auto mode."""
    config.option.asyncio_mode = "auto"


# ============================================================================
# Settings and Configuration
# ============================================================================

@pytest.fixture(autouse=True)
def test_settings(monkeypatch) -> Settings:
    """
    Test settings loaded through get_settings().

    Environment variables are overridden so that every component calling
    get_settings() sees the same values; the cache is cleared around each test.
    """
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setenv("LOG_LEVEL", "40")
    monkeypatch.setenv("LOG_FORMAT", "console")
    monkeypatch.setenv("REPOSITORY_QUERY_LOGGING", "true")
    monkeypatch.delenv("REPOSITORY_SEARCH_FIELDS", raising=False)

    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
async def test_engine():
    """
    Create a test database engine with all tables.

    StaticPool keeps a single connection so the in-memory database lives
    for the whole test.
    """
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    """Create session factory for tests."""
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(test_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session.

    Repositories only flush; nothing is committed and the database is
    discarded with the engine after the test.
    """
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def db_manager() -> AsyncGenerator[DatabaseManager, None]:
    """Provide a connected DatabaseManager with tables created."""
    manager = DatabaseManager()
    await manager.connect(TEST_DATABASE_URL)
    await manager.create_all()

    yield manager

    await manager.disconnect()
