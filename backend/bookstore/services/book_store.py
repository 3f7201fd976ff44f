"""
Bookstore API — Abstract Book Store Interface
===============================================

What:  Abstract base class defining the persistence contract the /books
       handlers rely on.
Why:   Handlers call exactly one store operation per request and never know
       which backend sits underneath (SQL database or process memory).
How:   Concrete stores inherit from BookStore and implement every method.
Who:   SqlBookStore (sql_book_store.py), InMemoryBookStore
       (memory_book_store.py).
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from bookstore.exceptions import NotFoundError
from bookstore.models.book import INT_COLUMN_MAX, Book


class BookStore(ABC):
    """
    Abstract collection of Book records keyed by an integer id.

    Contract:
        - ids are assigned by the store on create, strictly increasing,
          and never reused after a delete
        - find_by_id / update / delete raise NotFoundError for unknown ids,
          including ids no backend could ever have assigned
        - update is a full replacement of every mutable field
        - backend failures are wrapped in DatabaseError (or another
          BookstoreError), never leaked as driver exceptions
    """

    # Short backend label reported by /health
    name: str = "abstract"

    @staticmethod
    def check_id(book_id: Optional[int]) -> int:
        """Raise NotFoundError for an id outside the range the id column holds."""
        if book_id is None or not 1 <= book_id <= INT_COLUMN_MAX:
            raise NotFoundError(resource="book", resource_id=book_id)
        return book_id

    @abstractmethod
    async def create(self, book: Book) -> int:
        """
        Persist a new book and return its freshly assigned id.

        Any id already set on `book` is discarded.
        """

    @abstractmethod
    async def find_by_id(self, book_id: int) -> Book:
        """
        Return the book stored under `book_id`.

        Raises:
            NotFoundError: No such book.
        """

    @abstractmethod
    async def get_all(self) -> List[Book]:
        """Return every stored book in ascending id order (empty list if none)."""

    @abstractmethod
    async def update(self, book: Book) -> None:
        """
        Replace the stored record with id `book.id` by `book`.

        Raises:
            NotFoundError: No book with that id exists.
        """

    @abstractmethod
    async def delete(self, book: Book) -> None:
        """
        Remove the stored record with id `book.id`.

        Raises:
            NotFoundError: The book is already gone (double delete).
        """

    @abstractmethod
    async def ping(self) -> bool:
        """Lightweight reachability check used by GET /health."""
