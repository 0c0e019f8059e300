"""ASGI middleware that answers ``/sitemap.xml`` before the wrapped app sees it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.datastructures import URL
from starlette.responses import Response

from sitemaphandler import handler
from sitemaphandler.models.http import SitemapRequest

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from sitemaphandler.state import AppState


class SitemapMiddleware:
    """Pure ASGI middleware wrapping the rest of the application.

    When the handler produces a sitemap the response is sent here and the
    wrapped app is never called for that request. Everything else, including
    non-HTTP scopes, is forwarded untouched. Errors raised while generating a
    sitemap propagate to the enclosing server.
    """

    def __init__(self, app: ASGIApp, *, state: AppState) -> None:
        self.app = app
        self.state = state

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            url = URL(scope=scope)
            request = SitemapRequest(url=str(url), host=url.hostname or "")
            result = await handler.handle(request, self.state)
            if result is not None:
                response = Response(
                    result.body,
                    status_code=result.status_code,
                    headers={"Content-Type": result.content_type},
                )
                await response(scope, receive, send)
                return

        await self.app(scope, receive, send)
