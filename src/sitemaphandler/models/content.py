from __future__ import annotations

from pydantic import BaseModel


class ContentItem(BaseModel):
    """A node of the content tree, as seen by a sitemap source."""

    path: str
    name: str
    children: list[ContentItem] = []

    def walk(self):
        """Yield this item and all of its descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()
