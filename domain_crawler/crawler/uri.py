# domain_crawler/crawler/uri.py
"""
URI canonicalization and crawl-scope checks.

URIs travel through the crawler as plain strings; :func:`normalize_uri` turns
them into the identity key used for deduplication.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from domain_crawler.logger import get_logger

__all__ = ("normalize_uri", "host_of", "ScopeFilter")

log = get_logger("uri")


def normalize_uri(uri: str) -> str:
    """
    Canonical form of *uri*: fragment dropped, empty path replaced by ``/``,
    one trailing ``/`` stripped from longer paths.

    Scheme, userinfo, host, port and query are kept exactly as written,
    including an empty ``?`` query. A URI that cannot be parsed is returned
    unchanged.
    """
    try:
        parts = urlsplit(uri)
        # .port validates the authority section ("http://h:bad/" raises)
        parts.port
    except ValueError as exc:
        log.warning("Failed to normalize URI %r: %s. Returning original.", uri, exc)
        return uri

    without_fragment = uri.split("#", 1)[0]
    if not parts.netloc and "//" not in without_fragment[: len(parts.scheme) + 3]:
        # opaque URI (mailto:, urn:, ...) has no hierarchical path to normalize
        return without_fragment

    path = parts.path or "/"
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]

    # urlsplit lower-cases the scheme; keep the spelling from the input
    scheme = without_fragment[: len(parts.scheme)]
    if scheme.lower() != parts.scheme:
        scheme = parts.scheme
    rebuilt = f"{scheme}://{parts.netloc}{path}" if scheme else f"//{parts.netloc}{path}"
    if "?" in without_fragment:
        rebuilt += "?" + parts.query
    return rebuilt


def host_of(uri: str) -> Optional[str]:
    """Lower-cased host of *uri*, or None when it has none or is unparsable."""
    try:
        return urlsplit(uri).hostname or None
    except ValueError:
        return None


class ScopeFilter:
    """Keeps the crawl on the host the start URI belongs to."""

    def __init__(self, allowed_domain: str) -> None:
        if not allowed_domain:
            raise ValueError("allowed_domain must be a non-empty host name")
        self.allowed_domain = allowed_domain.lower()

    @classmethod
    def for_uri(cls, start_uri: str) -> ScopeFilter:
        host = host_of(start_uri)
        if host is None:
            raise ValueError(f"Invalid URI - no host found: {start_uri}")
        return cls(host)

    def in_scope(self, uri: Optional[str]) -> bool:
        if not uri:
            return False
        host = host_of(uri)
        return host is not None and host == self.allowed_domain

    __call__ = in_scope

    def __repr__(self) -> str:
        return f"ScopeFilter({self.allowed_domain!r})"
