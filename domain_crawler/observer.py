# File: domain_crawler/observer.py
"""domain_crawler.observer: sinks that receive per-page crawl results."""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Optional, Set

from domain_crawler.crawler.models import CrawledPage, FailedPage
from domain_crawler.logger import get_logger

__all__ = ["ConsoleCrawlObserver", "CrawlRecorder", "MultiObserver"]

_RULE = "-" * 50


class ConsoleCrawlObserver:
    """Logs every crawled page together with the links this observer has not seen yet.

    The "already seen" set belongs to the instance, so two observers (or two
    crawls) never share it.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or get_logger("observer")
        self._seen: Set[str] = set()

    def on_page_crawled(self, uri: str, links: AbstractSet[str]) -> None:
        new_links = sorted(link for link in links if link not in self._seen)
        self._seen.update(new_links)

        lines = [_RULE, f"Crawled Page: {uri}"]
        if new_links:
            lines.append(f"Found {len(links)} total links ({len(new_links)} new):")
            lines.extend(f"  -> {link}" for link in new_links)
        else:
            lines.append(f"Found {len(links)} total links (all already seen)")
        lines.append(_RULE)
        self.logger.info("\n".join(lines))

    def on_crawl_failed(self, uri: str, reason: str, error: Optional[BaseException]) -> None:
        if error is not None:
            self.logger.warning("Failed to crawl %s: Reason: %s. Error: %s", uri, reason, error)
        else:
            self.logger.warning("Failed to crawl %s: Reason: %s", uri, reason)

    @property
    def seen_links(self) -> frozenset[str]:
        return frozenset(self._seen)


class CrawlRecorder:
    """Collects results in memory for reports and tests."""

    def __init__(self) -> None:
        self.pages: List[CrawledPage] = []
        self.failures: List[FailedPage] = []

    def on_page_crawled(self, uri: str, links: AbstractSet[str]) -> None:
        self.pages.append(CrawledPage(uri, sorted(links)))

    def on_crawl_failed(self, uri: str, reason: str, error: Optional[BaseException]) -> None:
        self.failures.append(FailedPage(uri, reason, None if error is None else repr(error)))

    @property
    def crawled_uris(self) -> List[str]:
        return [p.uri for p in self.pages]

    @property
    def failed(self) -> dict[str, str]:
        return {f.uri: f.reason for f in self.failures}


class MultiObserver:
    """Forwards every event to each wrapped observer in order."""

    def __init__(self, observers: Iterable) -> None:
        self.observers = list(observers)

    def on_page_crawled(self, uri: str, links: AbstractSet[str]) -> None:
        for observer in self.observers:
            observer.on_page_crawled(uri, links)

    def on_crawl_failed(self, uri: str, reason: str, error: Optional[BaseException]) -> None:
        for observer in self.observers:
            observer.on_crawl_failed(uri, reason, error)
