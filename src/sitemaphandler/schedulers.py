"""Background scheduler coroutine for in-memory cache cleanup."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from sitemaphandler.state import AppState

log = structlog.get_logger()


async def run_cache_cleanup_scheduler(state: AppState) -> None:
    """Evict expired sitemaps from the memory cache on the configured interval.

    Reads already ignore expired entries; this only bounds memory held by
    sites that stop being requested.
    """
    interval_seconds = state.settings.cache.cleanup_interval_minutes * 60

    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await state.cache.purge_expired()
        except Exception:
            log.warning("sitemap_cache_cleanup_error", exc_info=True)
