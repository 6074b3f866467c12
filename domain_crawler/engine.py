# File: domain_crawler/engine.py
"""domain_crawler.engine: wiring layer that assembles the crawler and runs it."""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack
from typing import Optional, Tuple

from domain_crawler.config import CrawlerConfig
from domain_crawler.crawler.crawler import CrawlEngine
from domain_crawler.crawler.fetcher import Fetcher
from domain_crawler.crawler.link_extractor import LinkExtractor
from domain_crawler.crawler.models import CrawlResult
from domain_crawler.crawler.page_processor import PageProcessor
from domain_crawler.crawler.ports import CrawlObserver, Frontier, PageFetcher, VisitedSet
from domain_crawler.crawler.ports import LinkExtractor as LinkExtractorPort
from domain_crawler.crawler.uri import ScopeFilter
from domain_crawler.logger import logger
from domain_crawler.observer import ConsoleCrawlObserver, CrawlRecorder, MultiObserver
from domain_crawler.storage import redis_store
from domain_crawler.storage.memory import MemoryFrontier, MemoryVisitedSet

__all__ = ["build_engine", "open_store", "start_crawl"]


def build_engine(
    start_uri: str,
    *,
    fetcher: PageFetcher,
    extractor: LinkExtractorPort,
    observer: CrawlObserver,
    frontier: Frontier,
    visited: VisitedSet,
    max_concurrent_requests: int,
) -> CrawlEngine:
    """Assemble a CrawlEngine restricted to the host of *start_uri*.

    Raises ValueError when *start_uri* has no host or the limit is below 1.
    """
    if max_concurrent_requests < 1:
        raise ValueError("max_concurrent_requests must be >= 1")
    scope = ScopeFilter.for_uri(start_uri)
    processor = PageProcessor(
        fetcher=fetcher,
        extractor=extractor,
        observer=observer,
        frontier=frontier,
        visited=visited,
        scope=scope,
        permits=asyncio.Semaphore(max_concurrent_requests),
    )
    return CrawlEngine(processor, frontier, visited)


async def open_store(config: CrawlerConfig, stack: AsyncExitStack) -> Tuple[Frontier, VisitedSet]:
    """Create the frontier/visited pair selected by ``config.store``.

    A Redis client is registered on *stack* so it is closed with it; an
    unreachable server raises here, before any crawl work starts.
    """
    if config.store == "memory":
        return MemoryFrontier(), MemoryVisitedSet()

    logger.info("Connecting to Redis at: %s", config.redis_url)
    client = await redis_store.connect(config.redis_url)
    stack.push_async_callback(client.aclose)
    frontier = redis_store.RedisFrontier(client, config.key_prefix)
    visited = redis_store.RedisVisitedSet(client, config.key_prefix)
    if config.reset_store:
        logger.info("Clearing frontier and visited keys")
        await frontier.reset()
        await visited.reset()
    return frontier, visited


async def start_crawl(
    config: CrawlerConfig,
    start_uri: str,
    observer: Optional[CrawlObserver] = None,
) -> CrawlResult:
    """Run a complete crawl for *start_uri* with the configured backends.

    Console logging of each page is always on; *observer*, if given, receives
    the same events. Returns everything recorded during the crawl.
    """
    scope = ScopeFilter.for_uri(start_uri)
    recorder = CrawlRecorder()
    sinks = [ConsoleCrawlObserver(), recorder]
    if observer is not None:
        sinks.append(observer)

    logger.info("Restricting to host: %s", scope.allowed_domain)
    logger.info("Max concurrent requests: %d", config.max_concurrent_requests)
    logger.info("HTTP timeout: %s seconds", config.http_timeout)

    async with AsyncExitStack() as stack:
        frontier, visited = await open_store(config, stack)
        fetcher = await stack.enter_async_context(Fetcher(config))
        engine = build_engine(
            start_uri,
            fetcher=fetcher,
            extractor=LinkExtractor(),
            observer=MultiObserver(sinks),
            frontier=frontier,
            visited=visited,
            max_concurrent_requests=config.max_concurrent_requests,
        )
        stats = await engine.crawl(start_uri)

    logger.info("Crawl finished.")
    return CrawlResult(
        start_uri=start_uri,
        pages=recorder.pages,
        failures=recorder.failures,
        stats=stats,
    )
