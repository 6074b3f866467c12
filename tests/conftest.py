# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Dict, Iterable, List, Optional

import pytest
from aiohttp import web

from domain_crawler.crawler.models import FetchOutcome, FetchStatus
from domain_crawler.observer import CrawlRecorder
from domain_crawler.storage.memory import MemoryFrontier, MemoryVisitedSet


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class FakeSite:
    """
    In-memory website used as both PageFetcher and LinkExtractor.

    ``pages`` maps a URI to the links found on it; ``statuses`` maps a URI to a
    failing FetchStatus. Unknown URIs answer NOT_FOUND. The fetcher keeps
    track of every call and of the peak number of concurrent fetches.
    """

    def __init__(
        self,
        pages: Dict[str, Iterable[str]],
        statuses: Optional[Dict[str, FetchStatus]] = None,
        delay: float = 0.0,
    ) -> None:
        self.pages = {uri: set(links) for uri, links in pages.items()}
        self.statuses = dict(statuses or {})
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, uri: str) -> FetchOutcome:
        self.calls.append(uri)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            else:
                await asyncio.sleep(0)
            if uri in self.statuses:
                return FetchOutcome.failure(self.statuses[uri])
            if uri not in self.pages:
                return FetchOutcome.failure(FetchStatus.NOT_FOUND)
            return FetchOutcome.success(uri)
        finally:
            self.in_flight -= 1

    def extract(self, content: str, base_uri: str) -> set[str]:
        return set(self.pages.get(content, ()))


@pytest.fixture()
def frontier() -> MemoryFrontier:
    return MemoryFrontier()


@pytest.fixture()
def visited() -> MemoryVisitedSet:
    return MemoryVisitedSet()


@pytest.fixture()
def recorder() -> CrawlRecorder:
    return CrawlRecorder()


async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on an ephemeral port, yield its base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()
