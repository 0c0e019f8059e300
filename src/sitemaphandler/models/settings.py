from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from urllib.parse import parse_qsl

from pydantic import BaseModel


class SitemapMode(StrEnum):
    INACTIVE = "Inactive"
    STORED_IN_CACHE = "StoredInCache"
    STORED_IN_FILE = "StoredInFile"

    @classmethod
    def parse(cls, raw: str) -> SitemapMode | str:
        """Map a stored mode value to a member; unknown values come back unchanged.

        Matching ignores case. An empty value means the sitemap is off.
        """
        value = raw.strip()
        if not value:
            return cls.INACTIVE
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        return value


class SitemapSettings(BaseModel):
    """Typed snapshot of a site's sitemap settings item, read once per request."""

    mode: SitemapMode | str = SitemapMode.INACTIVE
    external_sitemaps: list[str] = []
    is_index: bool = False

    @classmethod
    def from_fields(cls, fields: Mapping[str, str]) -> SitemapSettings:
        """Build settings from raw item fields.

        ``external_sitemaps`` is a query-string encoded name/value list; the
        values, in order, are the sitemap URLs. ``sitemap_index`` is "1" when
        the site publishes an index instead of its own page list.
        """
        raw_external = fields.get("external_sitemaps", "") or ""
        external = [
            value for _, value in parse_qsl(raw_external, keep_blank_values=False) if value
        ]
        return cls(
            mode=SitemapMode.parse(fields.get("mode", "") or ""),
            external_sitemaps=external,
            is_index=(fields.get("sitemap_index", "") or "").strip() == "1",
        )
