"""
Bookstore API — FastAPI Application Factory
=============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(store_provider) returns a configured FastAPI instance.
       The store provider is passed in explicitly; when omitted it is built
       from settings (STORE_BACKEND).
Who:   uvicorn (`uvicorn bookstore.main:app`), `python -m bookstore`, tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS     │
    │                                                     │
    │  Routes:                                            │
    │    /restapi/books        GET, POST                  │
    │    /restapi/books/{id}   GET, PUT, DELETE           │
    │    /health               GET                        │
    │                                                     │
    │  Exception Handlers:                                │
    │    Validation→400 │ NotFound→404 │ Database→500     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, optionally create tables
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from bookstore import __version__
from bookstore.config import settings
from bookstore.database import create_tables, dispose_engine
from bookstore.exceptions import (
    BookstoreError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from bookstore.middleware.logging import RequestLoggingMiddleware
from bookstore.middleware.request_id import RequestIDMiddleware, request_id_var
from bookstore.routes import books, health
from bookstore.services.providers import StoreProvider, default_store_provider

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] bookstore.access: GET /restapi/books 200 ...
    Called once from the lifespan handler, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Containers capture stdout
        ],
        force=True,
    )

    # Per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Setup logging
        2. Create tables when DB_CREATE_TABLES is set (SQL backend only)
    Shutdown:
        1. Dispose database engine (close all pooled connections)
    """
    setup_logging()
    logger.info("Bookstore API %s starting up (store=%s)", __version__, settings.store_backend)

    if settings.store_backend == "sql" and settings.db_create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    logger.info(
        "Serving books at http://%s:%d%s/books",
        settings.backend_host, settings.backend_port, settings.api_prefix,
    )

    yield

    logger.info("Bookstore API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse body.

    Handler hierarchy:
        RequestValidationError  → 400 (bad JSON, wrong types, non-integer id)
        ValidationError         → 400
        NotFoundError           → 404
        DatabaseError           → 500 (generic message, details logged)
        BookstoreError (base)   → 500
        Exception (fallback)    → 500

    Responses never carry stack traces or SQL; those are logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """FastAPI rejected the path or body; report field errors as 400."""
        rid = request_id_var.get("")
        logger.warning("[%s] Request validation failed: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "The request was malformed or had fields of the wrong type.",
                "details": jsonable_encoder(exc.errors()),
                "request_id": rid,
            },
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Database error — generic message to user, details logged server-side."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(BookstoreError)
    async def handle_bookstore_error(request: Request, exc: BookstoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500 with the request ID; stack trace to the log only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store_provider: Optional[StoreProvider] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store_provider: Request-scoped BookStore factory (see
            services/providers.py). Defaults to the backend named by
            STORE_BACKEND.

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="Bookstore API",
        description="CRUD REST endpoint for the book resource.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.store_provider = store_provider or default_store_provider()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(books.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


# uvicorn expects `bookstore.main:app` to be importable
app = create_app()
