"""Background persistence of generated sitemaps.

File-mode responses never wait on disk I/O: the handler submits a write job
and returns. Jobs are drained by a fixed pool of worker tasks owned by the
application lifespan; the first submission starts the pool if nothing else
did. Each submission gets a future that resolves to True once the file is in
place (False if the write failed) so callers that care, tests mostly, can
await completion. Write failures are logged here and never
reach the request that triggered them.
"""

from __future__ import annotations

import asyncio
from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from sitemaphandler.protocols import SitemapFileStoreProtocol

log = structlog.get_logger()


@dataclass
class _WriteJob:
    site_name: str
    content: str
    done: asyncio.Future[bool]


class SitemapWriter:
    """Queue plus worker pool that persists sitemaps through a file store."""

    def __init__(self, store: SitemapFileStoreProtocol, *, workers: int = 2) -> None:
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self._store = store
        self._workers = workers
        self._queue: asyncio.Queue[_WriteJob] = asyncio.Queue()
        self._tasks: list[asyncio.Task[None]] = []

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        """Spawn the worker tasks. Must be called from a running event loop."""
        if self._tasks:
            return
        self._tasks = [
            asyncio.create_task(self._run_worker(n), name=f"sitemap-writer-{n}")
            for n in range(self._workers)
        ]
        log.info("sitemap_writer_started", workers=self._workers)

    def submit(self, site_name: str, content: str) -> asyncio.Future[bool]:
        """Queue a write and return immediately.

        Starts the worker pool if nobody has, so queued jobs always get a
        worker and their futures always resolve.
        """
        done: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        if not self._tasks:
            log.warning("sitemap_writer_not_running", site=site_name, action="starting")
            self.start()
        self._queue.put_nowait(_WriteJob(site_name=site_name, content=content, done=done))
        return done

    async def drain(self) -> None:
        """Wait until every queued job has been processed."""
        await self._queue.join()

    async def stop(self, *, drain: bool = True) -> None:
        """Optionally finish queued jobs, then cancel the workers."""
        if drain and self._tasks:
            await self.drain()
        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            with suppress(asyncio.CancelledError):
                await task
        self._tasks = []
        log.info("sitemap_writer_stopped")

    async def _run_worker(self, worker_id: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self._store.write(job.site_name, job.content)
            except asyncio.CancelledError:
                if not job.done.done():
                    job.done.cancel()
                raise
            except Exception:
                log.warning(
                    "sitemap_file_write_failed",
                    site=job.site_name,
                    worker=worker_id,
                    exc_info=True,
                )
                if not job.done.done():
                    job.done.set_result(False)
            else:
                if not job.done.done():
                    job.done.set_result(True)
            finally:
                self._queue.task_done()
