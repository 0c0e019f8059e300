from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    DATABASE_NOT_FOUND = "DATABASE_NOT_FOUND"
    ROOT_ITEM_NOT_FOUND = "ROOT_ITEM_NOT_FOUND"


class SitemapError(Exception):
    """Raised when a sitemap cannot be generated for a resolved site.

    Never caught by the handler or the middleware: it propagates to the
    surrounding ASGI stack, which owns the error response.
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
