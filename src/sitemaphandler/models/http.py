from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True)
class SitemapRequest:
    """The parts of an incoming request the sitemap handler looks at."""

    url: str  # full request URL, scheme and query included
    host: str

    @property
    def scheme(self) -> str:
        return urlsplit(self.url).scheme

    @property
    def path(self) -> str:
        return urlsplit(self.url).path or "/"

    @property
    def path_and_query(self) -> str:
        parts = urlsplit(self.url)
        path = parts.path or "/"
        return f"{path}?{parts.query}" if parts.query else path


@dataclass(frozen=True)
class SitemapResponse:
    content: str
    status_code: int = 200
    media_type: str = "application/xml"
    charset: str = "utf-8"

    @property
    def content_type(self) -> str:
        return f"{self.media_type}; charset={self.charset}"

    @property
    def body(self) -> bytes:
        return self.content.encode(self.charset)
