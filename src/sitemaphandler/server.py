"""Server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Build AppState from Settings
- Assemble the Starlette app with the sitemap middleware in front
- Start/stop background workers in the lifespan
- Run uvicorn
"""

from __future__ import annotations

import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from sitemaphandler import __version__
from sitemaphandler.cache import MemoryCache
from sitemaphandler.config import Settings
from sitemaphandler.filestore import SitemapFileStore
from sitemaphandler.middleware import SitemapMiddleware
from sitemaphandler.schedulers import run_cache_cleanup_scheduler
from sitemaphandler.sites import ConfiguredSettingsAccessor, ConfiguredSiteResolver
from sitemaphandler.sources import InMemoryContentRepository, XmlSitemapSource
from sitemaphandler.state import AppState
from sitemaphandler.writer import SitemapWriter

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# State and application
# ---------------------------------------------------------------------------


def build_state(settings: Settings) -> AppState:
    """Wire the configuration-backed collaborators and both storage backends."""
    file_store = SitemapFileStore(settings.files.temp_dir)
    return AppState(
        settings=settings,
        resolver=ConfiguredSiteResolver(settings.sites),
        settings_accessor=ConfiguredSettingsAccessor(settings.sites),
        repository=InMemoryContentRepository(settings.content),
        source=XmlSitemapSource(),
        cache=MemoryCache(),
        file_store=file_store,
        writer=SitemapWriter(file_store, workers=settings.files.writer_workers),
    )


async def healthz(request: Request) -> PlainTextResponse:
    return PlainTextResponse("ok")


def create_app(settings: Settings, state: AppState | None = None) -> Starlette:
    """Build the ASGI app. ``state`` defaults to ``build_state(settings)``."""
    state = state if state is not None else build_state(settings)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        log.info("server_starting", version=__version__, sites=len(settings.sites))
        state.writer.start()
        cache_cleanup_task = asyncio.create_task(run_cache_cleanup_scheduler(state))
        log.info("server_started", version=__version__)
        try:
            yield
        finally:
            cache_cleanup_task.cancel()
            with suppress(asyncio.CancelledError):
                await cache_cleanup_task
            await state.writer.stop()
            log.info("server_stopping")

    app = Starlette(
        routes=[Route("/healthz", healthz)],
        middleware=[Middleware(SitemapMiddleware, state=state)],
        lifespan=lifespan,
    )
    app.state.sitemap = state
    return app


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main() -> None:
    settings = Settings()
    setup_logging(settings)
    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )


if __name__ == "__main__":
    main()
