from __future__ import annotations

from sitemaphandler.models.cache import CachedSitemap
from sitemaphandler.models.content import ContentItem
from sitemaphandler.models.http import SitemapRequest, SitemapResponse
from sitemaphandler.models.links import LinkOptions, UrlOptions
from sitemaphandler.models.settings import SitemapMode, SitemapSettings
from sitemaphandler.models.site import SiteConfig, SiteContext

__all__ = [
    # site
    "SiteConfig",
    "SiteContext",
    # settings
    "SitemapMode",
    "SitemapSettings",
    # cache
    "CachedSitemap",
    # links
    "LinkOptions",
    "UrlOptions",
    # content
    "ContentItem",
    # http
    "SitemapRequest",
    "SitemapResponse",
]
