"""Configuration-backed site resolution and sitemap settings lookup."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import structlog

from sitemaphandler.models.settings import SitemapSettings
from sitemaphandler.models.site import SiteContext

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sitemaphandler.config import SiteDefinition
    from sitemaphandler.models.http import SitemapRequest
    from sitemaphandler.models.site import SiteConfig

log = structlog.get_logger()


def _strip_port(host: str) -> str:
    if host.startswith("["):  # IPv6 literal
        return host.split("]", 1)[0] + "]"
    return host.rsplit(":", 1)[0] if ":" in host else host


def host_matches(pattern: str, host: str) -> bool:
    """Match a host against a ``|``-separated list of wildcard patterns."""
    host = _strip_port(host).lower()
    return any(
        fnmatchcase(host, candidate.strip().lower())
        for candidate in pattern.split("|")
        if candidate.strip()
    )


class ConfiguredSiteResolver:
    """Resolves sites by host name, in configuration order.

    A site with an empty ``host_name`` matches any host but is only used when
    no site with a pattern matched.
    """

    def __init__(self, sites: Sequence[SiteConfig]) -> None:
        self._sites = list(sites)

    def resolve(self, request: SitemapRequest) -> SiteContext | None:
        fallback: SiteConfig | None = None
        for site in self._sites:
            if not site.host_name.strip():
                fallback = fallback or site
                continue
            if host_matches(site.host_name, request.host):
                return SiteContext(site=site, database=site.database)
        if fallback is not None:
            return SiteContext(site=fallback, database=fallback.database)
        return None

    def is_valid_for_path(self, url: str, site: SiteConfig, path: str) -> bool:
        """True when ``url`` addresses ``path`` under the site's virtual folder."""
        expected = site.virtual_folder.rstrip("/") + "/" + path.lstrip("/")
        return (urlsplit(url).path or "/").lower() == expected.lower()


class ConfiguredSettingsAccessor:
    """Reads sitemap settings from the ``sitemap`` block of each site definition."""

    def __init__(self, sites: Sequence[SiteDefinition]) -> None:
        self._fields = {site.name: site.sitemap for site in sites if site.sitemap is not None}

    def get_settings(self, context: SiteContext) -> SitemapSettings | None:
        fields = self._fields.get(context.site.name)
        if fields is None:
            log.debug("sitemap_settings_missing", site=context.site.name)
            return None
        return SitemapSettings.from_fields(fields.model_dump())
