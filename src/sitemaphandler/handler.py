"""Sitemap request handler.

Decides, per request, whether ``/sitemap.xml`` is served from the in-memory
cache, from the site's sitemap file, or regenerated. Returns the response to
send, or ``None`` to let the rest of the application handle the request.
No ASGI imports: middleware.py owns the wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sitemaphandler.errors import ErrorCode, SitemapError
from sitemaphandler.keys import build_cache_key, resolve_scheme
from sitemaphandler.models.http import SitemapResponse
from sitemaphandler.models.links import LinkOptions, UrlOptions
from sitemaphandler.models.settings import SitemapMode

if TYPE_CHECKING:
    from sitemaphandler.models.http import SitemapRequest
    from sitemaphandler.models.settings import SitemapSettings
    from sitemaphandler.models.site import SiteConfig, SiteContext
    from sitemaphandler.state import AppState

SITEMAP_PATH = "/sitemap.xml"


def is_sitemap_request(request: SitemapRequest) -> bool:
    return request.path_and_query.lower().endswith(SITEMAP_PATH)


async def handle(request: SitemapRequest, state: AppState) -> SitemapResponse | None:
    """Serve ``/sitemap.xml`` for the current site, or return ``None`` to pass through."""
    if not is_sitemap_request(request):
        return None

    log = structlog.get_logger().bind(url=request.url)

    context = state.resolver.resolve(request)
    if context is None or not state.resolver.is_valid_for_path(
        request.url, context.site, SITEMAP_PATH
    ):
        log.info("sitemap_pass_through", reason="cannot resolve site or url")
        return None

    log = log.bind(site=context.site.name)
    settings = state.settings_accessor.get_settings(context)
    mode = settings.mode if settings is not None else SitemapMode.INACTIVE

    if mode == SitemapMode.INACTIVE:
        log.info("sitemap_pass_through", reason="sitemap is off", mode=str(mode))
        return None

    if mode == SitemapMode.STORED_IN_CACHE:
        key = build_cache_key(context.site, context.database, request.url)
        content = await state.cache.get(key)
        if content:
            log.info("sitemap_cache_hit")
        else:
            log.info("sitemap_cache_miss_generating")
            content = await generate(settings, context, request, state)
            await state.cache.set(key, content, state.settings.cache.expiration_minutes)
    elif mode == SitemapMode.STORED_IN_FILE:
        content = await state.file_store.read(context.site.name)
        if content:
            log.info("sitemap_file_hit")
        else:
            log.info("sitemap_file_miss_generating")
            content = await generate(settings, context, request, state)
            # Not awaited: the response never waits on the disk write.
            state.writer.submit(context.site.name, content)
    else:
        log.info("sitemap_pass_through", reason="unknown error", mode=str(mode))
        return None

    return SitemapResponse(content=content)


async def generate(
    settings: SitemapSettings,
    context: SiteContext,
    request: SitemapRequest,
    state: AppState,
) -> str:
    """Produce sitemap XML for a site.

    Index mode returns the source's index over the external sitemaps and
    never touches the content tree. Otherwise the site's start item is looked
    up in the active database and handed to the source with link options.
    Failures propagate to the caller.
    """
    if settings.is_index:
        return await state.source.build_index(settings.external_sitemaps)

    site = context.site
    database = context.database
    if database is None or not state.repository.has_database(database):
        raise SitemapError(
            code=ErrorCode.DATABASE_NOT_FOUND,
            message=f"Content database not found: {database!r}",
        )

    root_path = site.root_path + site.start_item
    root = state.repository.get_item(database, root_path)
    if root is None:
        raise SitemapError(
            code=ErrorCode.ROOT_ITEM_NOT_FOUND,
            message=f"Start item {root_path!r} not found in database {database!r}",
        )

    return await state.source.build_document(
        root, settings.external_sitemaps, build_link_options(site, request)
    )


def build_link_options(site: SiteConfig, request: SitemapRequest) -> LinkOptions:
    return LinkOptions(
        request_url=request.url,
        target_host_name=resolve_target_host_name(site, request.host),
        scheme=resolve_scheme(site, request.url),
        url_options=UrlOptions(
            site=site.name,
            always_include_server_url=False,
            site_resolving=True,
        ),
    )


def resolve_target_host_name(site: SiteConfig, request_host: str) -> str:
    """Pick the host that generated links point at.

    An explicit target host wins. A host pattern that several tenants could
    share falls back to the host of the current request.
    """
    if site.target_host_name:
        return site.target_host_name
    if not site.is_host_name_unique():
        return request_host
    return site.host_name
