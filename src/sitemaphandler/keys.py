"""Cache keys for generated sitemaps."""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from sitemaphandler.models.site import SiteConfig

CACHE_NAMESPACE = "SITEMAP"


def resolve_scheme(site: SiteConfig, url: str) -> str:
    """The site's scheme override if set, else the request URL's scheme."""
    return site.scheme or urlsplit(url).scheme


def build_cache_key(site: SiteConfig, database: str | None, url: str) -> str:
    """Return ``SITEMAP/<database>/<site>/<url>/<scheme>``.

    ``url`` is used verbatim, so keys are case-sensitive on the URL. A missing
    database contributes an empty segment.
    """
    scheme = resolve_scheme(site, url)
    return f"{CACHE_NAMESPACE}/{database or ''}/{site.name}/{url}/{scheme}"
