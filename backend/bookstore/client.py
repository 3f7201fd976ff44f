"""
Bookstore API — Async HTTP Client
===================================

What:  A small async client for the /books endpoints.
How:   Wraps an httpx.AsyncClient. Payloads are the same pydantic schemas
       the server uses, so field names and types always match.

Usage:
    async with BookstoreClient("http://localhost:8000/restapi") as client:
        book_id = await client.create_book(BookRequest(title="T", isbn="X"))
        book = await client.get_book(book_id)

Tests inject an httpx.AsyncClient built on ASGITransport instead of a URL.
"""

import logging
from typing import Any, List, Optional

import httpx

from bookstore.exceptions import BookstoreError, NotFoundError
from bookstore.schemas.book import BookRequest, BookResponse

logger = logging.getLogger(__name__)


class BookstoreClientError(BookstoreError):
    """
    Raised for any non-2xx, non-404 response.

    Attributes:
        status_code: HTTP status returned by the server
        body:        Decoded JSON error body, or the raw text if not JSON
    """

    def __init__(self, status_code: int, body: Any = None):
        message = f"Bookstore API returned HTTP {status_code}"
        if isinstance(body, dict) and body.get("message"):
            message = f"{message}: {body['message']}"
        super().__init__(message=message, context={"status_code": status_code})
        self.status_code = status_code
        self.body = body


class BookstoreClient:
    """
    Async client for the book resource.

    Args:
        base_url: API root including the prefix, e.g. http://host:8000/restapi
        http_client: Pre-built httpx.AsyncClient. Its base_url is used as-is
            and it is NOT closed by this client.
        timeout: Request timeout in seconds when the client builds its own
            httpx.AsyncClient.
    """

    def __init__(
        self,
        base_url: str = "",
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout
        )

    async def __aenter__(self) -> "BookstoreClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ── Operations ────────────────────────────────────────────────────────

    async def list_books(self) -> List[BookResponse]:
        response = await self._request("GET", "/books")
        return [BookResponse.model_validate(item) for item in response.json()]

    async def get_book(self, book_id: int) -> BookResponse:
        response = await self._request("GET", f"/books/{book_id}", book_id=book_id)
        return BookResponse.model_validate(response.json())

    async def create_book(self, book: BookRequest) -> int:
        """Create a book and return the id the server assigned."""
        response = await self._request("POST", "/books", json=_payload(book))
        location = response.headers.get("Location")
        if not location:
            raise BookstoreClientError(response.status_code, "Missing Location header")
        return int(location.rstrip("/").rsplit("/", 1)[-1])

    async def update_book(self, book_id: int, book: BookRequest) -> None:
        await self._request("PUT", f"/books/{book_id}", book_id=book_id, json=_payload(book))

    async def delete_book(self, book_id: int) -> None:
        await self._request("DELETE", f"/books/{book_id}", book_id=book_id)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        book_id: Optional[int] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        response = await self._http.request(method, path, **kwargs)
        logger.debug("%s %s -> %d", method, path, response.status_code)

        if response.status_code == 404:
            raise NotFoundError(resource="book", resource_id=book_id)
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = response.text
            raise BookstoreClientError(response.status_code, body)
        return response


def _payload(book: BookRequest) -> dict:
    # mode="json" turns Decimal into a string the server parses losslessly
    return book.model_dump(mode="json")
