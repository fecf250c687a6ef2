"""
Q&A Forum Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── database:        Database handle on a private in-memory SQLite DB,
    │                    schema created from the ORM metadata, FKs enforced
    └── test_client:     HTTPX AsyncClient wired to a fresh app using `database`
"""

import os
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Set before any qaforum import so Settings() picks them up
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

import qaforum.models  # noqa: F401  (registers tables on Base.metadata)
from qaforum.database import Base, Database
from qaforum.main import create_app


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_question(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = question
            result = await question_service.get_question(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """
    A Database handle on an in-memory SQLite database.

    StaticPool keeps a single connection so every session sees the same
    in-memory database; the PRAGMA makes SQLite enforce foreign keys the way
    PostgreSQL does.
    """
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(db.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield db

    await db.dispose()


@pytest_asyncio.fixture
async def test_client(database) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to a fresh app instance over ASGITransport.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
