# domain_crawler/crawler/page_processor.py
"""
Single-page pipeline: fetch → classify → extract → filter/dedup → enqueue → report.
"""
from __future__ import annotations

import asyncio
from typing import Callable

from domain_crawler.crawler.models import FetchOutcome
from domain_crawler.crawler.ports import CrawlObserver, Frontier, LinkExtractor, PageFetcher, VisitedSet
from domain_crawler.crawler.uri import ScopeFilter, normalize_uri
from domain_crawler.logger import get_logger

__all__ = ("PageProcessor", "UNEXPECTED_ERROR")

#: reason code reported when the pipeline itself raised
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


class PageProcessor:
    """Processes one claimed URI and feeds newly found links back into the frontier.

    :meth:`process_page` never raises an ``Exception``: every failure is turned
    into an ``on_crawl_failed`` report so a single bad page cannot disturb the
    engine's task accounting.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        extractor: LinkExtractor,
        observer: CrawlObserver,
        frontier: Frontier,
        visited: VisitedSet,
        scope: ScopeFilter,
        permits: asyncio.Semaphore,
        normalizer: Callable[[str], str] = normalize_uri,
    ) -> None:
        self.fetcher = fetcher
        self.extractor = extractor
        self.observer = observer
        self.frontier = frontier
        self.visited = visited
        self.scope = scope
        self.permits = permits
        self.normalize = normalizer
        self.logger = get_logger("processor")

    async def process_page(self, uri: str) -> None:
        self.logger.debug("Processing page: %s", uri)
        try:
            outcome = await self._fetch(uri)
            if outcome.ok:
                await self._handle_success(uri, outcome.content or "")
            else:
                self.observer.on_crawl_failed(uri, outcome.status.name, None)
                self.logger.debug("Failed to process page: %s - status %s", uri, outcome.status.name)
        except Exception as exc:
            self.logger.error("Unexpected error processing page %s", uri, exc_info=exc)
            self._report_unexpected(uri, exc)

    async def _fetch(self, uri: str) -> FetchOutcome:
        async with self.permits:
            return await self.fetcher.fetch(uri)

    async def _handle_success(self, uri: str, content: str) -> None:
        discovered = self.extractor.extract(content, uri)
        enqueued = await self.enqueue_new_links(discovered)
        # observers get every discovered link, not only the enqueued ones
        self.observer.on_page_crawled(uri, discovered)
        self.logger.debug(
            "Page %s processed: %d links found, %d enqueued", uri, len(discovered), len(enqueued)
        )

    async def enqueue_new_links(self, links: set[str]) -> set[str]:
        """Normalize *links*, enqueue those in scope and not yet visited.

        Two pages may race past ``is_visited`` for the same link; the
        duplicate frontier entry is dropped later by ``mark_visited``.
        """
        enqueued: set[str] = set()
        for link in sorted({self.normalize(link) for link in links}):
            if not self.scope.in_scope(link):
                continue
            if await self.visited.is_visited(link):
                continue
            await self.frontier.enqueue(link)
            enqueued.add(link)
        return enqueued

    def _report_unexpected(self, uri: str, exc: Exception) -> None:
        try:
            self.observer.on_crawl_failed(uri, UNEXPECTED_ERROR, exc)
        except Exception as report_exc:
            self.logger.error("Observer failed while reporting %s", uri, exc_info=report_exc)

