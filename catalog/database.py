"""
Catalog API: Database Session Management
==========================================

What:  Async SQLAlchemy engine and session factory wrapped in a `Database`
       object, plus the FastAPI dependency that hands out sessions.
How:   `create_app()` builds one Database per application and stores it on
       `app.state.database`. Route handlers receive a session through
       `get_db_session`, which commits on success and rolls back on error.
       The lifespan handler calls `Database.dispose()` on shutdown.

Connection Pooling:
    pool_size / max_overflow: from settings (server databases only)
    pool_pre_ping:            validates connections before use
    pool_recycle=3600:        recycles connections every hour
    SQLite (tests) runs with SQLAlchemy's default pool for the dialect.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from catalog.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, Alembic autogenerate,
    and `Database.create_tables()`.
    """
    pass


class Database:
    """
    Owns the engine and session factory for one application instance.

    Lifecycle:
        1. Constructed by create_app() from Settings (no connection yet)
        2. Sessions opened per request via session() / get_db_session
        3. dispose() closes every pooled connection at shutdown
    """

    def __init__(self, settings: Settings):
        engine_kwargs: Dict[str, Any] = {
            "echo": settings.log_level == "DEBUG",
        }
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)

        # expire_on_commit=False: records stay readable after commit, which
        # the delete handlers rely on when returning the removed row.
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Transactional session scope.

        Commits when the block exits cleanly, rolls back and re-raises on
        any exception, and always closes the session.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self) -> None:
        """Creates every table registered on Base (dev and tests only)."""
        # Model modules must be imported so their tables are registered.
        from catalog import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Runs SELECT 1; raises if the database is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Gracefully closes all connections in the pool."""
        await self.engine.dispose()


# ── Request Dependencies ──────────────────────────────────────────────────

def get_database(request: Request) -> Database:
    """Returns the Database created for the running application."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Example usage in a route:
        @router.get("/category")
        async def list_categories(db: AsyncSession = Depends(get_db_session)):
            ...

    Raises:
        Database exceptions propagate to the global error handlers.
    """
    database = get_database(request)
    async with database.session() as session:
        yield session
