# domain_crawler/crawler/models.py
"""
Data models for the DomainCrawler crawler.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


class FetchStatus(enum.Enum):
    """Classification of one fetch attempt."""

    SUCCESS = "SUCCESS"
    NOT_FOUND = "NOT_FOUND"
    CLIENT_ERROR = "CLIENT_ERROR"
    SERVER_ERROR = "SERVER_ERROR"
    FETCH_ERROR = "FETCH_ERROR"


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of fetching a page: HTML text on success, nothing otherwise."""

    content: Optional[str]
    status: FetchStatus

    def __post_init__(self) -> None:
        if (self.status is FetchStatus.SUCCESS) != (self.content is not None):
            raise ValueError(f"content must be present iff status is SUCCESS (got {self.status.name})")

    @classmethod
    def success(cls, content: str) -> FetchOutcome:
        return cls(content, FetchStatus.SUCCESS)

    @classmethod
    def failure(cls, status: FetchStatus) -> FetchOutcome:
        return cls(None, status)

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.SUCCESS


@dataclass(slots=True)
class CrawlStats:
    """Counters for one finished crawl."""

    pages_dispatched: int = 0
    duplicates_dropped: int = 0
    elapsed: float = 0.0


@dataclass(slots=True)
class CrawledPage:
    """A successfully crawled page and every link discovered on it."""

    uri: str
    links: list[str] = field(default_factory=list)


@dataclass(slots=True)
class FailedPage:
    """A page that did not yield links, with the reason code."""

    uri: str
    reason: str
    error: Optional[str] = None


@dataclass(slots=True)
class CrawlResult:
    """Everything a finished crawl reports: pages, failures and counters."""

    start_uri: str
    pages: list[CrawledPage] = field(default_factory=list)
    failures: list[FailedPage] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)

    def to_dict(self) -> dict:
        return {
            "start_uri": self.start_uri,
            "pages": [{"uri": p.uri, "links": p.links} for p in self.pages],
            "failures": [{"uri": f.uri, "reason": f.reason, "error": f.error} for f in self.failures],
            "stats": {
                "pages_dispatched": self.stats.pages_dispatched,
                "duplicates_dropped": self.stats.duplicates_dropped,
                "elapsed": round(self.stats.elapsed, 3),
            },
        }
