# domain_crawler/crawler/ports.py
"""
Contracts between the crawl engine and its collaborators.

The engine only talks to these protocols; storage backends, the HTTP client,
the HTML parser and the reporting sink are plugged in from outside.
"""
from __future__ import annotations

from typing import AbstractSet, Optional, Protocol, runtime_checkable

from domain_crawler.crawler.models import FetchOutcome


@runtime_checkable
class Frontier(Protocol):
    """FIFO queue of URIs waiting to be fetched. Duplicates are allowed."""

    async def enqueue(self, uri: str) -> None: ...

    async def dequeue(self) -> Optional[str]:
        """Oldest pending URI, or None right away when the queue is empty."""
        ...

    async def is_empty(self) -> bool:
        """Snapshot only; may be stale while other tasks enqueue."""
        ...


@runtime_checkable
class VisitedSet(Protocol):
    """Set of URIs already claimed for processing."""

    async def mark_visited(self, uri: str) -> bool:
        """Add *uri*; True only for the single call that actually added it."""
        ...

    async def is_visited(self, uri: str) -> bool: ...


@runtime_checkable
class PageFetcher(Protocol):
    async def fetch(self, uri: str) -> FetchOutcome: ...


@runtime_checkable
class LinkExtractor(Protocol):
    def extract(self, content: str, base_uri: str) -> set[str]: ...


@runtime_checkable
class CrawlObserver(Protocol):
    """Sink for per-page crawl results."""

    def on_page_crawled(self, uri: str, links: AbstractSet[str]) -> None: ...

    def on_crawl_failed(self, uri: str, reason: str, error: Optional[BaseException]) -> None: ...
