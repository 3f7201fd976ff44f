"""
Bookstore API — Test Configuration (conftest.py)
==================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    mock_db_session:  AsyncMock standing in for AsyncSession
    memory_store:     fresh InMemoryBookStore
    sql_tables:       creates the books table in a temp SQLite file, drops it after
    store_provider:   parametrized over both backends (memory, sql)
    test_client:      httpx AsyncClient on an app backed by memory_store
    sql_client:       httpx AsyncClient on an app backed by the SQL store
    backend_client:   httpx AsyncClient, parametrized over both backends
    sample_book:      request body used across tests
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any bookstore import: settings and the engine are
# created at import time
_db_dir = tempfile.mkdtemp(prefix="bookstore_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir}/test.db"
os.environ["STORE_BACKEND"] = "sql"
os.environ["DB_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

from bookstore.database import create_tables, dispose_engine, drop_tables  # noqa: E402
from bookstore.main import create_app  # noqa: E402
from bookstore.services.memory_book_store import InMemoryBookStore  # noqa: E402
from bookstore.services.providers import (  # noqa: E402
    memory_store_provider,
    sql_store_provider,
)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = book
        await SqlBookStore(mock_db_session).find_by_id(1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def memory_store():
    return InMemoryBookStore()


@pytest_asyncio.fixture
async def sql_tables():
    """
    Creates the books table in the temp SQLite database for one test.

    Dropping the table also clears its AUTOINCREMENT counter, so every test
    starts again at id 1. The engine is disposed so no pooled connection
    outlives the test's event loop.
    """
    await create_tables()
    try:
        yield
    finally:
        await drop_tables()
        await dispose_engine()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store_provider(request):
    """A store provider for each backend; store contract tests run twice."""
    if request.param == "memory":
        yield memory_store_provider()
        return

    await create_tables()
    try:
        yield sql_store_provider()
    finally:
        await drop_tables()
        await dispose_engine()


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient talking to an app backed by the in-memory store.

    ASGITransport does not run the lifespan, so no logging setup or table
    creation happens here.
    """
    app = create_app(store_provider=memory_store_provider(memory_store))
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sql_client(sql_tables):
    """HTTPX AsyncClient talking to an app backed by the SQLite store."""
    app = create_app(store_provider=sql_store_provider())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture(params=["memory", "sql"])
async def backend_client(request):
    """HTTPX AsyncClient per backend, for checks both backends must agree on."""
    if request.param == "memory":
        app = create_app(store_provider=memory_store_provider())
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
        return

    await create_tables()
    try:
        app = create_app(store_provider=sql_store_provider())
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        await drop_tables()
        await dispose_engine()


@pytest.fixture
def sample_book():
    """Request body for POST/PUT; price and pages sent as strings on purpose."""
    return {
        "title": "T",
        "description": "A book about testing",
        "isbn": "X",
        "publisher": "Example Press",
        "language": "English",
        "author": "Jane Doe",
        "price": "0.00",
        "pages": "0",
    }
