# domain_crawler/crawler/link_extractor.py
"""
Link extraction for DomainCrawler: absolute http(s) page links from HTML.
"""
from __future__ import annotations

import re
from typing import Optional, Set
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, SoupStrainer
from bs4.element import Tag

from domain_crawler.logger import get_logger

#: paths ending in one of these are files, not pages
STATIC_FILE_RE = re.compile(
    r".*\.(jpg|jpeg|png|gif|bmp|webp|svg|pdf|docx?|xlsx?|pptx?|zip|rar|tar|gz|mp3|mp4|avi|mov|mkv)$",
    re.IGNORECASE,
)

# only <a href> tags are parsed
LINK_STRAINER = SoupStrainer("a", href=True)

log = get_logger("extractor")


class LinkExtractor:
    """Extracts crawlable links from a page.

    Non-web schemes (``mailto:``, ``tel:``, ``javascript:`` ...) and common
    static-file extensions are dropped. Fragments are kept; the crawler's
    normalizer removes them.
    """

    def __init__(self, parser: str = "lxml") -> None:
        self.parser = parser

    def extract(self, content: Optional[str], base_uri: str) -> Set[str]:
        if not content or not content.strip():
            return set()
        soup = BeautifulSoup(content, self.parser, parse_only=LINK_STRAINER)
        links: Set[str] = set()
        for tag in soup.find_all("a", href=True):
            if not isinstance(tag, Tag):
                continue
            href = tag.get("href")
            if not isinstance(href, str) or not href.strip():
                continue
            absolute = self._absolute(base_uri, href.strip())
            if absolute is not None and self.is_page_link(absolute):
                links.add(absolute)
        return links

    @staticmethod
    def _absolute(base_uri: str, href: str) -> Optional[str]:
        try:
            return urljoin(base_uri, href)
        except ValueError:
            log.debug("Ignoring malformed URI: %s", href)
            return None

    @staticmethod
    def is_page_link(uri: str) -> bool:
        try:
            parts = urlsplit(uri)
        except ValueError:
            return False
        if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
            return False
        return not STATIC_FILE_RE.match(parts.path)
