"""
Bookstore API — Package Initializer
=====================================

What: Marks the `bookstore` directory as a Python package.
Who:  Imported by uvicorn (`bookstore.main:app`), Alembic, and pytest.

Layering:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP handlers)       │  ← verb + path → one store call
    ├─────────────────────────────────────┤
    │      Services (BookStore backends)  │  ← SQL or in-memory persistence
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never touch SQLAlchemy directly; they only see the BookStore
    interface, so either backend can sit underneath.
"""

__version__ = "1.0.0"
