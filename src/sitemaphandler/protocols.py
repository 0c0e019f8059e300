"""Protocol interfaces for swappable components.

The handler and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight fakes and spies
- Hosting code to plug in its own site resolution, settings storage,
  content repository and sitemap generator
- Other cache backends (e.g. Redis) without changing the handler
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from sitemaphandler.models.content import ContentItem
    from sitemaphandler.models.http import SitemapRequest
    from sitemaphandler.models.links import LinkOptions
    from sitemaphandler.models.settings import SitemapSettings
    from sitemaphandler.models.site import SiteConfig, SiteContext


class SitemapCacheProtocol(Protocol):
    """Interface for the in-memory sitemap cache."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, content: str, ttl_minutes: int) -> None: ...

    async def purge_expired(self) -> int: ...


class SitemapFileStoreProtocol(Protocol):
    """Interface for the per-site sitemap file backend."""

    def path_for(self, site_name: str) -> Path: ...

    async def read(self, site_name: str) -> str | None: ...

    async def write(self, site_name: str, content: str) -> Path: ...


class SiteResolverProtocol(Protocol):
    """Resolves the current site and validates file requests against it."""

    def resolve(self, request: SitemapRequest) -> SiteContext | None: ...

    def is_valid_for_path(self, url: str, site: SiteConfig, path: str) -> bool: ...


class SettingsAccessorProtocol(Protocol):
    """Reads a site's sitemap settings item."""

    def get_settings(self, context: SiteContext) -> SitemapSettings | None: ...


class ContentRepositoryProtocol(Protocol):
    """Read access to the content databases."""

    def has_database(self, name: str) -> bool: ...

    def get_item(self, database: str, path: str) -> ContentItem | None: ...


class SitemapSourceProtocol(Protocol):
    """Produces sitemap XML."""

    async def build_index(self, urls: Sequence[str]) -> str: ...

    async def build_document(
        self,
        root: ContentItem,
        external_sitemaps: Sequence[str],
        options: LinkOptions,
    ) -> str: ...
