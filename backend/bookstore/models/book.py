"""
Bookstore API — Book SQLAlchemy Model
=======================================

What:  ORM model representing the `books` table.
Why:   The one entity this service manages. Both store backends hold Book
       instances, so routes see the same type whichever backend is active.
How:   Declarative SQLAlchemy 2.0 mapping; Alembic reads this for migrations.

Table Design:
    - Integer primary key, assigned by the database on insert
    - sqlite_autoincrement: SQLite otherwise reuses the highest id after a
      delete; PostgreSQL sequences never hand out an id twice
    - Every other column is nullable; the API validates type shape and
      column bounds only
    - price is NUMERIC(10, 2) so money never goes through a float column
    - ids outside 1..INT_COLUMN_MAX cannot name a row on any backend
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.database import Base

# Range of an INTEGER column on PostgreSQL (int4); ids and pages must fit
INT_COLUMN_MIN = -(2**31)
INT_COLUMN_MAX = 2**31 - 1


class Book(Base):
    """
    A single book record.

    Lifecycle:
        1. Created by POST with no id; the store assigns one
        2. Replaced wholesale by PUT (every field in MUTABLE_FIELDS)
        3. Removed by DELETE; its id is never handed out again
    """

    __tablename__ = "books"

    # Fields a PUT overwrites. `id` is deliberately absent.
    MUTABLE_FIELDS = (
        "title",
        "description",
        "isbn",
        "publisher",
        "language",
        "author",
        "price",
        "pages",
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Server-assigned identifier, never reused",
    )

    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    isbn: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    publisher: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    language: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    price: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    pages: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    def copy_fields_from(self, other: "Book") -> None:
        """Overwrite every mutable field with the values held by `other`."""
        for field in self.MUTABLE_FIELDS:
            setattr(self, field, getattr(other, field))

    def clone(self) -> "Book":
        """Detached copy including the id. Used by the in-memory store."""
        copy = Book(id=self.id)
        copy.copy_fields_from(self)
        return copy

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Book(id={self.id}, title={self.title!r}, isbn={self.isbn!r})>"
