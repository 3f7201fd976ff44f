"""
Bookstore API — Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the error cases the API surfaces.
Why:   Stores and routes raise these; global handlers registered in main.py
       turn them into JSON error responses with the right status code.
How:   Each exception carries a user-facing message and an optional context
       dict that is logged but never returned to the client.

Exception Hierarchy:
    BookstoreError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error

The client module adds BookstoreClientError (see client.py) for HTTP errors
that do not map onto one of these.
"""

from typing import Any, Dict, Optional


class BookstoreError(Exception):
    """
    Base exception for all Bookstore application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BookstoreError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request. FastAPI's own RequestValidationError (bad JSON,
    wrong field types, non-integer path id) is mapped to the same response
    shape in main.py.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(BookstoreError):
    """
    Raised when a requested book does not exist.

    What:    No record is stored under the requested id.
    When:    GET, PUT or DELETE on /books/{id} for an unknown or deleted id,
             or a store update/delete of a record that is already gone.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the stores convert that into
    this exception so routes never have to check for None.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseError(BookstoreError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query, insert, update or delete failed inside the SQL store.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The original
    SQLAlchemy error type is kept in `context` and logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
