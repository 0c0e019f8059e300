"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (SITEMAPHANDLER__CACHE__EXPIRATION_MINUTES=30)
  2. sitemaphandler.yaml    (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional, but a server without ``sites`` resolves nothing
and passes every request through.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from sitemaphandler.models.site import SiteConfig

_DEFAULT_CACHE_DIR = platformdirs.user_cache_dir("sitemaphandler")
_DEFAULT_TEMP_DIR = str(Path(_DEFAULT_CACHE_DIR) / "temp")


def _find_config_file() -> str | None:
    """Return the path of the first sitemaphandler.yaml found, or None."""
    candidates = [
        Path("sitemaphandler.yaml"),
        Path(platformdirs.user_config_dir("sitemaphandler")) / "sitemaphandler.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080


class CacheSettings(BaseModel):
    expiration_minutes: int = 60
    cleanup_interval_minutes: int = 15


class FileSettings(BaseModel):
    temp_dir: str = _DEFAULT_TEMP_DIR
    writer_workers: int = 2


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class SitemapFields(BaseModel):
    """Raw sitemap settings fields, stored the way the settings item stores them."""

    mode: str = ""
    external_sitemaps: str = ""  # query-string encoded: "news=https%3A%2F%2F...&blog=..."
    sitemap_index: str = ""  # "1" enables index mode


class SiteDefinition(SiteConfig):
    """A configured site together with its sitemap settings item."""

    sitemap: SitemapFields | None = None


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: SITEMAPHANDLER__SERVER__PORT=9090
        env_prefix="SITEMAPHANDLER__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    cache: CacheSettings = CacheSettings()
    files: FileSettings = FileSettings()
    logging: LoggingSettings = LoggingSettings()
    sites: list[SiteDefinition] = []
    # database name -> item paths
    content: dict[str, list[str]] = {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
