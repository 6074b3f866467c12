# domain_crawler/storage/redis_store.py
"""
Redis-backed frontier and visited set.

The frontier is a Redis list (``RPUSH`` to enqueue, ``LPOP`` to dequeue) and
the visited set a Redis set, where ``SADD`` answering 1 means "first claim".
Both are single commands, so they stay atomic across any number of crawler
tasks or processes sharing the server.
"""
from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from domain_crawler.logger import get_logger

__all__ = ("FRONTIER_KEY", "VISITED_KEY", "RedisFrontier", "RedisVisitedSet", "connect")

FRONTIER_KEY = "frontier-queue"
VISITED_KEY = "visited-urls"

log = get_logger("storage.redis")


async def connect(url: str) -> Redis:
    """Open a client for *url* and make sure the server answers.

    Raises the client's ``ConnectionError``/``TimeoutError`` when it does not.
    """
    client = Redis.from_url(url, decode_responses=True)
    try:
        await client.ping()
    except Exception:
        await client.aclose()
        raise
    log.info("Connected to Redis at %s", url)
    return client


class RedisFrontier:
    def __init__(self, client: Redis, key_prefix: str = "", key: str = FRONTIER_KEY) -> None:
        self.client = client
        self.key = f"{key_prefix}{key}"

    async def enqueue(self, uri: str) -> None:
        await self.client.rpush(self.key, uri)

    async def dequeue(self) -> Optional[str]:
        return await self.client.lpop(self.key)

    async def is_empty(self) -> bool:
        return await self.client.llen(self.key) == 0

    async def reset(self) -> None:
        await self.client.delete(self.key)


class RedisVisitedSet:
    def __init__(self, client: Redis, key_prefix: str = "", key: str = VISITED_KEY) -> None:
        self.client = client
        self.key = f"{key_prefix}{key}"

    async def mark_visited(self, uri: str) -> bool:
        return await self.client.sadd(self.key, uri) == 1

    async def is_visited(self, uri: str) -> bool:
        return bool(await self.client.sismember(self.key, uri))

    async def reset(self) -> None:
        await self.client.delete(self.key)
