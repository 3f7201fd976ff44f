"""
Bookstore API — Store Providers
=================================

What:  Factories that hand a BookStore to one request at a time.
Why:   The application factory takes a provider as an explicit argument,
       so tests and deployments pick the backend without patching globals.
How:   A provider is a zero-argument callable returning an async context
       manager that yields a BookStore:

           async with provider() as store:
               await store.get_all()

       sql:    a new session and SqlBookStore per request; commit on
               success, rollback on error
       memory: the same InMemoryBookStore every time
"""

from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncGenerator, Callable, Optional

from bookstore.config import settings
from bookstore.database import session_scope
from bookstore.services.book_store import BookStore
from bookstore.services.memory_book_store import InMemoryBookStore
from bookstore.services.sql_book_store import SqlBookStore

StoreProvider = Callable[[], AsyncContextManager[BookStore]]


def sql_store_provider() -> StoreProvider:
    """Provider opening one database session per request."""

    @asynccontextmanager
    async def provide() -> AsyncGenerator[BookStore, None]:
        async with session_scope() as session:
            yield SqlBookStore(session)

    return provide


def memory_store_provider(store: Optional[InMemoryBookStore] = None) -> StoreProvider:
    """Provider sharing a single in-memory store across requests."""
    shared = store if store is not None else InMemoryBookStore()

    @asynccontextmanager
    async def provide() -> AsyncGenerator[BookStore, None]:
        yield shared

    return provide


def default_store_provider() -> StoreProvider:
    """Build the provider selected by STORE_BACKEND."""
    if settings.store_backend == "memory":
        return memory_store_provider()
    return sql_store_provider()
