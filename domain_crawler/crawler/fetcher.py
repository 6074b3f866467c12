# domain_crawler/crawler/fetcher.py
"""
Fetcher module: performs the HTTP request and classifies the response.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

from aiohttp import ClientResponse, ClientSession, ClientTimeout

from domain_crawler.config import CrawlerConfig
from domain_crawler.crawler.models import FetchOutcome, FetchStatus
from domain_crawler.logger import get_logger


class Fetcher:
    """Fetches pages with aiohttp and maps responses onto :class:`FetchStatus`.

    Use as an async context manager, or hand in an existing session (which
    then stays owned by the caller).
    """

    def __init__(
        self,
        config: CrawlerConfig,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self.logger = get_logger("fetcher")

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.http_timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, uri: str) -> FetchOutcome:
        """
        GET *uri* and classify the result.

        Only 2xx ``text/html`` responses count as SUCCESS; network errors and
        timeouts become FETCH_ERROR instead of raising.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        if urlsplit(uri).scheme.lower() not in ("http", "https"):
            return FetchOutcome.failure(FetchStatus.CLIENT_ERROR)

        try:
            async with self.session.get(uri, allow_redirects=True) as resp:
                return await self._classify(resp)
        except Exception as exc:
            self.logger.error("Error fetching URI %s: %s", uri, str(exc) or type(exc).__name__)
            return FetchOutcome.failure(FetchStatus.FETCH_ERROR)

    @staticmethod
    async def _classify(resp: ClientResponse) -> FetchOutcome:
        status = resp.status
        if 200 <= status < 300:
            ctype = resp.headers.get("Content-Type", "").lower()
            if "text/html" in ctype:
                return FetchOutcome.success(await resp.text(errors="replace"))
            return FetchOutcome.failure(FetchStatus.CLIENT_ERROR)
        if status == 404:
            return FetchOutcome.failure(FetchStatus.NOT_FOUND)
        if 400 <= status < 500:
            return FetchOutcome.failure(FetchStatus.CLIENT_ERROR)
        return FetchOutcome.failure(FetchStatus.SERVER_ERROR)
