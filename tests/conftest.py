"""Shared test fixtures for the sitemaphandler test suite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from sitemaphandler.cache import MemoryCache
from sitemaphandler.config import Settings
from sitemaphandler.filestore import SitemapFileStore
from sitemaphandler.sites import ConfiguredSettingsAccessor, ConfiguredSiteResolver
from sitemaphandler.sources import InMemoryContentRepository, XmlSitemapSource
from sitemaphandler.state import AppState
from sitemaphandler.writer import SitemapWriter

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from sitemaphandler.models.content import ContentItem
    from sitemaphandler.models.links import LinkOptions

EXTERNAL_SITEMAPS = (
    "news=https%3A%2F%2Fnews.example.com%2Fsitemap.xml"
    "&blog=https%3A%2F%2Fblog.example.com%2Fsitemap.xml"
)


class FakeClock:
    """Controllable replacement for ``datetime.now(UTC)``."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


class SpySource(XmlSitemapSource):
    """XmlSitemapSource that records every call it receives."""

    def __init__(self) -> None:
        self.index_calls: list[list[str]] = []
        self.document_calls: list[tuple[ContentItem, list[str], LinkOptions]] = []

    async def build_index(self, urls: Sequence[str]) -> str:
        self.index_calls.append(list(urls))
        return await super().build_index(urls)

    async def build_document(
        self,
        root: ContentItem,
        external_sitemaps: Sequence[str],
        options: LinkOptions,
    ) -> str:
        self.document_calls.append((root, list(external_sitemaps), options))
        return await super().build_document(root, external_sitemaps, options)

    @property
    def calls(self) -> int:
        return len(self.index_calls) + len(self.document_calls)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Sites covering every sitemap mode, plus a small content tree."""
    return Settings(
        cache={"expiration_minutes": 10},
        files={"temp_dir": str(tmp_path / "temp"), "writer_workers": 1},
        sites=[
            {
                "name": "site-a",
                "host_name": "a.example.com",
                "root_path": "/content/site-a",
                "sitemap": {"mode": "StoredInCache"},
            },
            {
                "name": "site-b",
                "host_name": "b.example.com",
                "root_path": "/content/site-b",
                "sitemap": {"mode": "StoredInFile"},
            },
            {
                "name": "site-off",
                "host_name": "off.example.com",
                "root_path": "/content/site-off",
                "sitemap": {"mode": "Inactive"},
            },
            {
                "name": "site-unset",
                "host_name": "unset.example.com",
                "root_path": "/content/site-unset",
            },
            {
                "name": "site-weird",
                "host_name": "weird.example.com",
                "root_path": "/content/site-weird",
                "sitemap": {"mode": "StoredInRedis"},
            },
            {
                "name": "site-index",
                "host_name": "index.example.com",
                "root_path": "/content/site-index",
                "sitemap": {
                    "mode": "StoredInCache",
                    "external_sitemaps": EXTERNAL_SITEMAPS,
                    "sitemap_index": "1",
                },
            },
            {
                "name": "site-shared",
                "host_name": "*.shared.example.com",
                "root_path": "/content/site-shared",
                "scheme": "https",
                "sitemap": {"mode": "StoredInCache"},
            },
            {
                "name": "site-broken",
                "host_name": "broken.example.com",
                "root_path": "/content/missing",
                "sitemap": {"mode": "StoredInCache"},
            },
        ],
        content={
            "web": [
                "/content/site-a/home",
                "/content/site-a/home/about",
                "/content/site-a/home/about/team",
                "/content/site-b/home",
                "/content/site-b/home/news",
                "/content/site-shared/home",
            ],
        },
    )


@pytest.fixture()
def spy_source() -> SpySource:
    return SpySource()


@pytest.fixture()
async def app_state(
    settings: Settings, clock: FakeClock, spy_source: SpySource
) -> AppState:
    """Fully wired AppState with a running writer pool and a fake clock."""
    file_store = SitemapFileStore(settings.files.temp_dir)
    writer = SitemapWriter(file_store, workers=settings.files.writer_workers)
    state = AppState(
        settings=settings,
        resolver=ConfiguredSiteResolver(settings.sites),
        settings_accessor=ConfiguredSettingsAccessor(settings.sites),
        repository=InMemoryContentRepository(settings.content),
        source=spy_source,
        cache=MemoryCache(clock=clock),
        file_store=file_store,
        writer=writer,
    )
    writer.start()
    yield state
    await writer.stop(drain=False)
