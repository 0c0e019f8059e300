from __future__ import annotations

from pydantic import BaseModel


class UrlOptions(BaseModel):
    """Site-scoped URL options used when building item links."""

    site: str
    always_include_server_url: bool = False
    site_resolving: bool = True


class LinkOptions(BaseModel):
    """Everything a sitemap source needs to turn items into absolute URLs."""

    request_url: str
    target_host_name: str
    scheme: str
    url_options: UrlOptions
