from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CachedSitemap(BaseModel):
    """Sitemap XML held by the in-memory cache."""

    key: str
    content: str
    inserted_at: datetime
    expires_at: datetime  # absolute; reads never extend it

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
