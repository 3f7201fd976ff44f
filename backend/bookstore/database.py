"""
Bookstore API — Database Session Management
=============================================

What:  Async SQLAlchemy engine, session factory, declarative base, and the
       per-request session scope used by the SQL book store.
Why:   Keeps every connection concern in one module.
How:   An async engine with connection pooling; `session_scope()` commits on
       success and rolls back on error.
When:  Engine is created at module import; sessions are created per request.

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    SQLite (used in tests) gets none of them: aiosqlite connections are
    file handles, and the pool arguments are rejected for in-memory URLs.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookstore.config import settings
from bookstore.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    """Engine keyword arguments for the configured database URL."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after commit, so a
# response can be built from an ORM object once the transaction is closed
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between the models, Alembic autogenerate and
    `create_tables()`.
    """
    pass


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a transactional session for one unit of work (one request).

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the caller
        3. On success: commits the transaction
        4. On error: rolls back and re-raises; a failed commit or any
           other SQLAlchemyError surfaces as DatabaseError
        5. Always: closes the session (returns connection to pool)

    Example:
        async with session_scope() as session:
            store = SqlBookStore(session)
            await store.create(book)
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Transaction rolled back: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__}) from e
        except Exception:
            # Roll back for any failure, including errors raised by the
            # route after the store call, then let the global handler respond
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """
    Create every table registered on Base.metadata if it does not exist.

    Used at startup when DB_CREATE_TABLES is set and by the test suite.
    Production schemas are managed by Alembic instead.
    """
    # Importing the models registers them on Base.metadata
    from bookstore.models import book  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    """Drop every table on Base.metadata. Test-suite teardown only."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
