"""Per-site sitemap files under the configured temp directory.

Writes use atomic replace semantics: content goes to a uniquely named
temporary file in the target directory, is fsynced, then ``os.replace``d
over ``sitemap-<site>.xml``. A concurrent reader sees the previous file or
the new one, never a partial write.
"""

from __future__ import annotations

import asyncio
import os
import sys
import tempfile
from contextlib import suppress
from pathlib import Path

import structlog

log = structlog.get_logger()


class SitemapFileStore:
    """Filesystem sitemap backend implementing SitemapFileStoreProtocol."""

    def __init__(self, temp_dir: Path | str) -> None:
        self._dir = Path(temp_dir).expanduser()

    def path_for(self, site_name: str) -> Path:
        return self._dir / f"sitemap-{site_name}.xml"

    async def read(self, site_name: str) -> str | None:
        """Read a site's sitemap. Returns ``None`` if there is no file or it is unreadable."""
        return await asyncio.to_thread(self._read, self.path_for(site_name))

    async def write(self, site_name: str, content: str) -> Path:
        """Create or replace a site's sitemap. Raises ``OSError`` on failure."""
        path = self.path_for(site_name)
        await asyncio.to_thread(self._write, path, content.encode("utf-8"))
        log.info("sitemap_file_written", site=site_name, path=str(path), size=len(content))
        return path

    # ------------------------------------------------------------------
    # Blocking helpers, run in a worker thread
    # ------------------------------------------------------------------

    @staticmethod
    def _read(path: Path) -> str | None:
        try:
            # Bytes, not text mode: line endings must come back as written.
            return path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError):
            log.warning("sitemap_file_read_error", path=str(path), exc_info=True)
            return None

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as file_obj:
                file_obj.write(data)
                file_obj.flush()
                os.fsync(file_obj.fileno())
            os.replace(tmp_path, path)
            _fsync_directory(path.parent)
        finally:
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)


def _fsync_directory(path: Path) -> None:
    if sys.platform == "win32":
        return  # Windows does not support fsync on directory handles
    directory_fd = os.open(path, os.O_RDONLY)
    try:
        os.fsync(directory_fd)
    finally:
        os.close(directory_fd)
