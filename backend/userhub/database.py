"""
UserHub Backend - Database Session Management
==============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` owns one engine (connection pool) for the whole process.
       It is built by the application factory and stored on `app.state`;
       request handlers get a per-request session through `get_db_session`,
       which commits on success and rolls back on error.
Who:   Application factory (construction and disposal), routes (sessions),
       tests (a throwaway SQLite database per test).

There is no module-level engine. Whoever builds the app decides which
database it talks to, so tests and scripts can hand in their own.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from userhub.config import Settings


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


class Database:
    """
    Process-wide handle on the storage backend.

    Pool Configuration (non-SQLite URLs only):
        pool_size:     persistent connections
        max_overflow:  temporary connections for spikes
        pool_pre_ping: validate connections before use
        pool_recycle:  recycle connections after an hour

    SQLite's async dialect uses its own pool classes that reject sizing
    arguments, so they are left out for sqlite URLs.
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = url
        engine_kwargs = {"echo": echo}
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=pool_pre_ping,
                pool_recycle=3600,
            )
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        # expire_on_commit=False: ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Transactional session scope.

        Commits when the block exits cleanly, rolls back and re-raises on
        any exception, and always returns the connection to the pool.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create every table registered on `Base.metadata` that is missing."""
        # Models must be imported so they register with Base.metadata
        from userhub.models import user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Run SELECT 1; raises whatever the driver raises when unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close all pooled connections (application shutdown)."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database attached by create_app()."""
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Application has no database configured")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    1. Opens a session on the application's Database
    2. Yields it to the route handler
    3. Commits on success, rolls back on any error (no partial writes)

    Exceptions are re-raised for the global error handlers.
    """
    async with get_database(request).session() as session:
        yield session
