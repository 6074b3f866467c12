"""domain_crawler.crawler: crawl engine, page pipeline and their collaborators."""

from domain_crawler.crawler.barrier import Phaser
from domain_crawler.crawler.crawler import CrawlEngine
from domain_crawler.crawler.models import CrawlStats, FetchOutcome, FetchStatus
from domain_crawler.crawler.page_processor import UNEXPECTED_ERROR, PageProcessor
from domain_crawler.crawler.uri import ScopeFilter, normalize_uri

__all__ = [
    "CrawlEngine",
    "CrawlStats",
    "FetchOutcome",
    "FetchStatus",
    "PageProcessor",
    "Phaser",
    "ScopeFilter",
    "UNEXPECTED_ERROR",
    "normalize_uri",
]
