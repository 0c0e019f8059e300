"""Application state container.

AppState is created once by ``server.create_app`` and handed to the sitemap
middleware, which passes it to the handler on every request. The two storage
backends live here, not in module globals, so tests can build a state around
fakes and a controllable clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sitemaphandler.config import Settings
    from sitemaphandler.protocols import (
        ContentRepositoryProtocol,
        SettingsAccessorProtocol,
        SiteResolverProtocol,
        SitemapCacheProtocol,
        SitemapFileStoreProtocol,
        SitemapSourceProtocol,
    )
    from sitemaphandler.writer import SitemapWriter


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to the sitemap handler."""

    settings: Settings

    # Collaborators owned by the hosting application
    resolver: SiteResolverProtocol
    settings_accessor: SettingsAccessorProtocol
    repository: ContentRepositoryProtocol
    source: SitemapSourceProtocol

    # Storage backends
    cache: SitemapCacheProtocol
    file_store: SitemapFileStoreProtocol
    writer: SitemapWriter
