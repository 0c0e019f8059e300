"""In-memory sitemap cache with absolute expiration.

Shared by every request in the process. All reads and writes go through a
single lock; nothing awaits while holding it. Expired entries are dropped on
the read that finds them and, in bulk, by ``purge_expired`` (driven by the
cleanup scheduler).
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from sitemaphandler.models.cache import CachedSitemap

if TYPE_CHECKING:
    from collections.abc import Callable

log = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MemoryCache:
    """Process-local sitemap cache implementing SitemapCacheProtocol."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._entries: dict[str, CachedSitemap] = {}
        self._lock = threading.Lock()

    async def get(self, key: str) -> str | None:
        """Return cached content, or ``None`` when missing or expired."""
        entry = self.get_entry(key)
        return entry.content if entry is not None else None

    def get_entry(self, key: str) -> CachedSitemap | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(now):
                del self._entries[key]
                log.debug("sitemap_cache_expired", key=key)
                return None
            return entry

    async def set(self, key: str, content: str, ttl_minutes: int) -> None:
        """Insert or overwrite ``key``; it expires ``ttl_minutes`` from now."""
        now = self._clock()
        entry = CachedSitemap(
            key=key,
            content=content,
            inserted_at=now,
            expires_at=now + timedelta(minutes=ttl_minutes),
        )
        with self._lock:
            self._entries[key] = entry
        log.debug("sitemap_cache_set", key=key, expires_at=entry.expires_at.isoformat())

    async def purge_expired(self) -> int:
        """Drop every expired entry. Returns the number removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
        log.info("sitemap_cache_cleanup_complete", deleted=len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
