"""Default content repository and sitemap source.

Minimal stand-ins for the content store and generator a hosting application
normally provides: items are plain paths from configuration, and the XML
lists one ``<url>`` per item under the site's start item.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, SubElement, tostring

from sitemaphandler.models.content import ContentItem

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sitemaphandler.models.links import LinkOptions

_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _normalise(path: str) -> str:
    return "/" + path.strip("/")


def _parent(path: str) -> str:
    head = path.rsplit("/", 1)[0]
    return head or "/"


class InMemoryContentRepository:
    """Content databases described as lists of item paths.

    Paths compare case-insensitively. An item's children are the configured
    paths directly beneath it.
    """

    def __init__(self, content: Mapping[str, Sequence[str]]) -> None:
        self._paths: dict[str, dict[str, str]] = {}
        for database, paths in content.items():
            by_key = {_normalise(p).lower(): _normalise(p) for p in paths}
            self._paths[database] = by_key

    def has_database(self, name: str) -> bool:
        return name in self._paths

    def get_item(self, database: str, path: str) -> ContentItem | None:
        paths = self._paths.get(database)
        if paths is None:
            return None
        key = _normalise(path).lower()
        if key not in paths:
            return None
        return self._build(paths, key)

    def _build(self, paths: dict[str, str], key: str) -> ContentItem:
        children = [
            self._build(paths, child)
            for child in sorted(paths)
            if child != key and _parent(child) == key
        ]
        original = paths[key]
        return ContentItem(path=original, name=original.rsplit("/", 1)[-1], children=children)


class XmlSitemapSource:
    """Writes sitemaps.org ``urlset`` and ``sitemapindex`` documents."""

    async def build_index(self, urls: Sequence[str]) -> str:
        index = Element("sitemapindex")
        index.set("xmlns", _SITEMAP_NS)
        for url in urls:
            sitemap = SubElement(index, "sitemap")
            SubElement(sitemap, "loc").text = url
        return _XML_DECLARATION + tostring(index, encoding="unicode") + "\n"

    async def build_document(
        self,
        root: ContentItem,
        external_sitemaps: Sequence[str],
        options: LinkOptions,
    ) -> str:
        # External sitemaps are only listed by index documents.
        base = f"{options.scheme}://{options.target_host_name}"
        urlset = Element("urlset")
        urlset.set("xmlns", _SITEMAP_NS)
        root_path = root.path.rstrip("/")
        for item in root.walk():
            relative = item.path[len(root_path) :].lower() or "/"
            SubElement(SubElement(urlset, "url"), "loc").text = base + relative
        return _XML_DECLARATION + tostring(urlset, encoding="unicode") + "\n"
