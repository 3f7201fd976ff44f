"""
Bookstore API — Book Route Handlers
=====================================

What:  The five CRUD handlers of the book resource.
How:   Each handler receives a request-scoped BookStore and makes one
       store call (two for PUT/DELETE: fetch, then write).
Who:   Mounted by main.create_app() below settings.api_prefix (/restapi).

Route table:
    GET    /books          → store.get_all()                     200 [Book]
    GET    /books/{id}     → store.find_by_id()                  200 Book | 404
    POST   /books          → store.create()                      201 empty
    PUT    /books/{id}     → find_by_id() + apply + update()     200 empty | 404
    DELETE /books/{id}     → find_by_id() + delete()             200 empty | 404

Errors are not caught here: NotFoundError and validation failures travel
to the global handlers registered in main.py.
"""

import logging
from typing import AsyncGenerator, List

from fastapi import APIRouter, Depends, Request, Response

from bookstore.schemas.book import BookRequest, BookResponse, ErrorResponse
from bookstore.services.book_store import BookStore

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/books", tags=["Books"])


async def get_book_store(request: Request) -> AsyncGenerator[BookStore, None]:
    """
    FastAPI dependency yielding the BookStore for this request.

    The provider is the one passed to create_app() and kept on app.state;
    for the SQL backend its exit commits or rolls back the request's session.
    Handlers depend on it with scope="function" so that exit runs before
    the response is sent: a failed commit becomes a 500, never a 201.
    """
    async with request.app.state.store_provider() as store:
        yield store


@router.get(
    "",
    response_model=List[BookResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all books",
)
async def list_books(
    store: BookStore = Depends(get_book_store, scope="function"),
) -> List[BookResponse]:
    """Return every stored book in ascending id order."""
    books = await store.get_all()
    return [BookResponse.model_validate(book) for book in books]


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    responses={
        404: {"description": "Book not found", "model": ErrorResponse},
        400: {"description": "Malformed id", "model": ErrorResponse},
    },
    summary="Get a single book by ID",
)
async def get_book(
    book_id: int,
    store: BookStore = Depends(get_book_store, scope="function"),
) -> BookResponse:
    book = await store.find_by_id(book_id)
    return BookResponse.model_validate(book)


@router.post(
    "",
    status_code=201,
    response_class=Response,
    responses={
        201: {"description": "Book created; Location points at the new resource"},
        400: {"description": "Malformed body", "model": ErrorResponse},
    },
    summary="Create a book",
)
async def create_book(
    payload: BookRequest,
    request: Request,
    store: BookStore = Depends(get_book_store, scope="function"),
) -> Response:
    """
    Create a book from the request body.

    The body never carries an id; the store assigns one. The response body
    is empty and the Location header names the new resource.
    """
    book_id = await store.create(payload.to_model())
    location = str(request.url_for("get_book", book_id=book_id))
    return Response(status_code=201, headers={"Location": location})


@router.put(
    "/{book_id}",
    response_class=Response,
    responses={
        200: {"description": "Book replaced"},
        404: {"description": "Book not found", "model": ErrorResponse},
        400: {"description": "Malformed body or id", "model": ErrorResponse},
    },
    summary="Replace a book",
)
async def update_book(
    book_id: int,
    payload: BookRequest,
    store: BookStore = Depends(get_book_store, scope="function"),
) -> Response:
    """
    Replace every mutable field of an existing book.

    The stored record is fetched first and the payload copied onto it, so
    the id always comes from the path and never from the client body.
    """
    book = await store.find_by_id(book_id)
    payload.apply_to(book)
    await store.update(book)
    return Response(status_code=200)


@router.delete(
    "/{book_id}",
    response_class=Response,
    responses={
        200: {"description": "Book deleted"},
        404: {"description": "Book not found", "model": ErrorResponse},
    },
    summary="Delete a book",
)
async def delete_book(
    book_id: int,
    store: BookStore = Depends(get_book_store, scope="function"),
) -> Response:
    book = await store.find_by_id(book_id)
    await store.delete(book)
    return Response(status_code=200)
