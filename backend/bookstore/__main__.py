"""
Run the Bookstore API with uvicorn: `python -m bookstore` or `bookstore-api`.

Host, port and log level come from settings (BACKEND_HOST, BACKEND_PORT,
LOG_LEVEL).
"""

import uvicorn

from bookstore.config import settings


def main() -> None:
    uvicorn.run(
        "bookstore.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
