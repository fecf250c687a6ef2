"""
Q&A Forum Backend - Database Session Management
=================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` owns one async engine (and therefore one connection pool)
       plus a session factory. The application creates it during startup,
       stores it on `app.state.database`, and disposes it at shutdown.
       `get_db_session` checks out one session per request; the session
       commits on success, rolls back on error, and always closes.
Who:   Route handlers receive sessions through FastAPI's Depends().

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    pool_recycle=3600 recycles connections every hour.

Row Ids:
    Every table keys on a 32-bit INTEGER starting at 1. `is_row_id` tells
    whether a client-supplied id could name a row at all; services treat any
    other value as absent without querying.
"""

from typing import Any, AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from qaforum.config import Settings

MAX_ROW_ID = 2**31 - 1


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Every model registers with `Base.metadata`, which Alembic reads for
    migrations and the test suite uses to create the schema.
    """
    pass


class Database:
    """
    Injected handle around the shared connection pool.

    Lifecycle:
        1. Created once at startup (see `qaforum.main.lifespan`)
        2. `session()` hands out a fresh AsyncSession per request
        3. `dispose()` closes every pooled connection at shutdown
    """

    def __init__(self, url: str, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False keeps loaded attributes readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build the production handle with pool sizing taken from settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            echo=settings.log_level == "DEBUG",
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def dispose(self) -> None:
        """Closes all connections in the pool."""
        await self.engine.dispose()


def is_row_id(value: int) -> bool:
    return 1 <= value <= MAX_ROW_ID


def get_database(request: Request) -> Database:
    """Returns the handle opened for this application instance."""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database handle is not initialised; was the app started?")
    return database


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's Database handle
        2. Yields it to the route handler
        3. On success: commits anything the service left pending
        4. On error: rolls back
        5. Always: closes the session (returns the connection to the pool)

    Services commit their own writes explicitly, so step 3 is normally a
    no-op.

    Example usage in a route:
        @router.get("/questions")
        async def list_questions(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database = get_database(request)
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
