# === FILE: domain_crawler/crawler/crawler.py ===
"""
Crawl orchestration: admission loop, bounded dispatch and quiescence detection.

One coordinating coroutine dequeues URIs, claims each one in the visited set
and hands first claims to their own asyncio task. Finding the frontier empty
proves nothing while tasks are still running, so the coordinator then waits on
a :class:`~domain_crawler.crawler.barrier.Phaser` for every in-flight task to
finish and looks at the frontier again. The crawl is over only when the
frontier is still empty after that rendezvous and no task is registered.
"""
from __future__ import annotations

import asyncio
import time
from typing import Callable, Set

from domain_crawler.crawler.barrier import Phaser
from domain_crawler.crawler.models import CrawlStats
from domain_crawler.crawler.page_processor import PageProcessor
from domain_crawler.crawler.ports import Frontier, VisitedSet
from domain_crawler.crawler.uri import normalize_uri
from domain_crawler.logger import get_logger

__all__ = ("CrawlEngine",)


class CrawlEngine:
    """Drives one crawl from a start URI until no further work can appear."""

    def __init__(
        self,
        processor: PageProcessor,
        frontier: Frontier,
        visited: VisitedSet,
        normalizer: Callable[[str], str] = normalize_uri,
    ) -> None:
        self.processor = processor
        self.frontier = frontier
        self.visited = visited
        self.normalize = normalizer
        self.logger = get_logger("engine")
        self._tasks: Set[asyncio.Task[None]] = set()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def crawl(self, start_uri: str) -> CrawlStats:
        """Crawl everything reachable from *start_uri* and return the counters.

        Store failures in the admission loop propagate to the caller; page
        level failures never do.
        """
        stats = CrawlStats()
        start = time.monotonic()
        seed = self.normalize(start_uri)
        self.logger.info("Starting crawl at %s", seed)
        await self.frontier.enqueue(seed)

        phaser = Phaser(1)
        try:
            while True:
                uri = await self.frontier.dequeue()
                if uri is not None:
                    if await self.visited.mark_visited(uri):
                        phaser.register()
                        self._dispatch(uri, phaser)
                        stats.pages_dispatched += 1
                    else:
                        stats.duplicates_dropped += 1
                    continue

                # running tasks may still enqueue work: wait for all of them
                await phaser.arrive_and_await_advance()
                if await self.frontier.is_empty() and phaser.registered_parties == 1:
                    break
        except BaseException:
            await self._cancel_in_flight()
            raise
        finally:
            phaser.arrive_and_deregister()

        stats.elapsed = time.monotonic() - start
        self.logger.info(
            "Crawl finished: %d pages in %.2f s (%d duplicate frontier entries dropped)",
            stats.pages_dispatched,
            stats.elapsed,
            stats.duplicates_dropped,
        )
        return stats

    def _dispatch(self, uri: str, phaser: Phaser) -> None:
        task = asyncio.create_task(self._run_task(uri, phaser), name=f"crawl:{uri}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run_task(self, uri: str, phaser: Phaser) -> None:
        try:
            await self.processor.process_page(uri)
        except asyncio.CancelledError:
            self.logger.warning("Task for URI %s was cancelled.", uri)
            raise
        finally:
            phaser.arrive_and_deregister()

    async def _cancel_in_flight(self) -> None:
        tasks = list(self._tasks)
        if not tasks:
            return
        self.logger.warning("Cancelling %d in-flight page tasks", len(tasks))
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
