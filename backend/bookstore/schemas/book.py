"""
Bookstore API — Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the JSON contract of the /books endpoints.
Why:   Input type checking, response serialization, and OpenAPI docs.
How:   FastAPI validates request bodies against BookRequest and renders
       BookResponse / ErrorResponse for output.

Schemas are kept apart from the SQLAlchemy model so the wire format can
differ from the table (e.g. price is a JSON number, never a string) and so a
client can never write the `id` column.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer

from bookstore.models.book import INT_COLUMN_MAX, INT_COLUMN_MIN, Book


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class BookRequest(BaseModel):
    """
    What:  Body of POST /books and PUT /books/{id}.

    Every field is optional. Values are type-checked and held to what the
    `books` columns can store, so an oversized value is a 400 on every
    backend. Lax mode accepts "0.00" for price and "0" for pages. Unknown
    keys, `id` included, are dropped: identifiers are always assigned by
    the store.
    """
    title: Optional[str] = Field(default=None, max_length=255, description="Book title")
    description: Optional[str] = Field(default=None, description="Free-text description")
    isbn: Optional[str] = Field(default=None, max_length=32, description="ISBN, stored as text")
    publisher: Optional[str] = Field(default=None, max_length=255, description="Publisher name")
    language: Optional[str] = Field(default=None, max_length=64, description="Language of the text")
    author: Optional[str] = Field(default=None, max_length=255, description="Author name")
    # Matches the NUMERIC(10, 2) column
    price: Optional[Decimal] = Field(
        default=None, max_digits=10, decimal_places=2, description="Price as a decimal number"
    )
    pages: Optional[int] = Field(
        default=None, ge=INT_COLUMN_MIN, le=INT_COLUMN_MAX, description="Number of pages"
    )

    model_config = {"extra": "ignore"}

    def to_model(self) -> Book:
        """Build a new, id-less Book from this payload."""
        return Book(**{field: getattr(self, field) for field in Book.MUTABLE_FIELDS})

    def apply_to(self, book: Book) -> Book:
        """Overwrite every mutable field of `book` (PUT semantics). Keeps book.id."""
        for field in Book.MUTABLE_FIELDS:
            setattr(book, field, getattr(self, field))
        return book


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class BookResponse(BaseModel):
    """
    What:  Full representation of a stored book.
    Who:   Returned by GET /books (as array items) and GET /books/{id}.
    """
    id: int = Field(description="Server-assigned identifier")
    title: Optional[str] = None
    description: Optional[str] = None
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    language: Optional[str] = None
    author: Optional[str] = None
    price: Optional[Decimal] = None
    pages: Optional[int] = None

    model_config = {"from_attributes": True}

    @field_serializer("price")
    def serialize_price(self, price: Optional[Decimal]) -> Optional[float]:
        # Pydantic renders Decimal as a JSON string by default
        return float(price) if price is not None else None


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every 4xx/5xx the API returns.

    Example:
        {
            "error": "not_found",
            "message": "book with ID '7' was not found",
            "details": null,
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check body returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Application version")
    store: str = Field(description="Store backend and reachability, e.g. 'sql:connected'")
    uptime_seconds: float = Field(description="Seconds since service started")
