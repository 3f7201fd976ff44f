"""
Bookstore API — In-Memory Book Store
======================================

What:  Process-local BookStore kept in a dict.
Why:   Runs the API with no database (STORE_BACKEND=memory), and gives the
       HTTP tests a store that needs no setup.
How:   A single instance is shared by every request. An asyncio.Lock guards
       the id counter and the dict; records are cloned on the way in and out
       so callers never hold a reference into the store.

Limitations:
    Single process only. Data is lost on restart, and each uvicorn worker
    gets its own independent store.
"""

import asyncio
import logging
from typing import Dict, List

from bookstore.exceptions import NotFoundError
from bookstore.models.book import Book
from bookstore.services.book_store import BookStore

logger = logging.getLogger(__name__)


class InMemoryBookStore(BookStore):
    """Dict-backed book store with a monotonic id counter."""

    name = "memory"

    def __init__(self):
        self._books: Dict[int, Book] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def create(self, book: Book) -> int:
        async with self._lock:
            book_id = self._next_id
            # The counter only moves forward, so deleted ids are never reissued
            self._next_id += 1
            stored = book.clone()
            stored.id = book_id
            self._books[book_id] = stored
        logger.info("Book created: id=%s", book_id)
        return book_id

    async def find_by_id(self, book_id: int) -> Book:
        self.check_id(book_id)
        async with self._lock:
            stored = self._books.get(book_id)
            if stored is None:
                raise NotFoundError(resource="book", resource_id=book_id)
            return stored.clone()

    async def get_all(self) -> List[Book]:
        async with self._lock:
            # Insertion order is ascending id order
            return [stored.clone() for stored in self._books.values()]

    async def update(self, book: Book) -> None:
        self.check_id(book.id)
        async with self._lock:
            stored = self._books.get(book.id)
            if stored is None:
                raise NotFoundError(resource="book", resource_id=book.id)
            stored.copy_fields_from(book)
        logger.info("Book updated: id=%s", book.id)

    async def delete(self, book: Book) -> None:
        self.check_id(book.id)
        async with self._lock:
            if self._books.pop(book.id, None) is None:
                raise NotFoundError(resource="book", resource_id=book.id)
        logger.info("Book deleted: id=%s", book.id)

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._books)
