from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator


class SiteConfig(BaseModel):
    """A published site (tenant) sharing the deployment."""

    model_config = ConfigDict(frozen=True)

    name: str
    root_path: str  # e.g. "/content/site-a"
    start_item: str = "/home"  # appended to root_path to locate the start item
    host_name: str = ""  # pattern: "*.example.com" or "a.example.com|b.example.com"
    target_host_name: str = ""
    scheme: str = ""  # overrides the request scheme when set
    virtual_folder: str = "/"
    database: str | None = "web"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        # The name becomes part of the sitemap file name.
        if not re.match(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$", v):
            raise ValueError(f"Invalid site name: {v!r}")
        return v

    def is_host_name_unique(self) -> bool:
        """True when the host pattern names exactly one concrete host."""
        host = self.host_name.strip()
        return bool(host) and "|" not in host and "*" not in host


@dataclass(frozen=True)
class SiteContext:
    """Site and content database resolved for the current request."""

    site: SiteConfig
    database: str | None
