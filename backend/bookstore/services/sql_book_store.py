"""
Bookstore API — SQL Book Store
================================

What:  BookStore implementation on top of an async SQLAlchemy session.
Why:   The production backend; PostgreSQL (asyncpg) in deployment, SQLite
       (aiosqlite) in the test suite.
How:   One instance per request, wrapping the request's session. The store
       only flushes; commit/rollback belong to database.session_scope().

Error Handling:
    Missing rows → NotFoundError (404).
    Any SQLAlchemyError → logged with its type, re-raised as DatabaseError
    (500) so no SQL or driver detail reaches the client.
"""

import logging
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.exceptions import DatabaseError, NotFoundError
from bookstore.models.book import Book
from bookstore.services.book_store import BookStore

logger = logging.getLogger(__name__)


class SqlBookStore(BookStore):
    """
    Book store backed by the `books` table.

    Id assignment is left to the database: an autoincrement primary key
    (SQLite AUTOINCREMENT, PostgreSQL sequence) is monotonic and does not
    reuse deleted ids, which also covers concurrent creates across workers.
    """

    name = "sql"

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get(self, book_id: int) -> Optional[Book]:
        result = await self.session.execute(
            select(Book).where(Book.id == book_id)
        )
        return result.scalar_one_or_none()

    async def create(self, book: Book) -> int:
        book.id = None
        try:
            self.session.add(book)
            await self.session.flush()  # Assigns the primary key without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating book: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the book. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e
        logger.info("Book created: id=%s", book.id)
        return book.id

    async def find_by_id(self, book_id: int) -> Book:
        # Never send the driver an id it cannot bind (asyncpg int4, sqlite int64)
        self.check_id(book_id)
        try:
            book = await self._get(book_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching book %s: %s", book_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the book. Please try again.",
                context={"book_id": book_id, "error_type": type(e).__name__},
            ) from e

        if book is None:
            raise NotFoundError(resource="book", resource_id=book_id)
        return book

    async def get_all(self) -> List[Book]:
        try:
            result = await self.session.execute(select(Book).order_by(Book.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing books: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve books. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

    async def update(self, book: Book) -> None:
        # find_by_id raises NotFoundError for a missing row
        existing = await self.find_by_id(book.id)
        # A book fetched through this session is already the identity-map
        # instance; a detached one has its fields copied across
        if existing is not book:
            existing.copy_fields_from(book)
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating book %s: %s", book.id, str(e))
            raise DatabaseError(
                message="Could not update the book. Please try again.",
                context={"book_id": book.id, "error_type": type(e).__name__},
            ) from e
        logger.info("Book updated: id=%s", book.id)

    async def delete(self, book: Book) -> None:
        existing = await self.find_by_id(book.id)
        try:
            await self.session.delete(existing)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting book %s: %s", book.id, str(e))
            raise DatabaseError(
                message="Could not delete the book. Please try again.",
                context={"book_id": book.id, "error_type": type(e).__name__},
            ) from e
        logger.info("Book deleted: id=%s", book.id)

    async def ping(self) -> bool:
        try:
            await self.session.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning("Health check: database unreachable: %s", str(e))
            return False
        return True
