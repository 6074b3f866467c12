# File: tests/test_storage.py
from __future__ import annotations

import asyncio

import pytest

from domain_crawler.storage import redis_store
from domain_crawler.storage.memory import MemoryFrontier, MemoryVisitedSet
from domain_crawler.storage.redis_store import RedisFrontier, RedisVisitedSet


class FakeRedis:
    """Just enough of redis.asyncio.Redis for the frontier/visited commands."""

    def __init__(self):
        self.lists: dict[str, list[str]] = {}
        self.sets: dict[str, set[str]] = {}
        self.closed = False

    async def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        await asyncio.sleep(0)
        return len(self.lists[key])

    async def lpop(self, key):
        await asyncio.sleep(0)
        items = self.lists.get(key)
        return items.pop(0) if items else None

    async def llen(self, key):
        return len(self.lists.get(key, []))

    async def sadd(self, key, *members):
        await asyncio.sleep(0)
        target = self.sets.setdefault(key, set())
        added = [m for m in members if m not in target]
        target.update(added)
        return len(added)

    async def sismember(self, key, member):
        return int(member in self.sets.get(key, set()))

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            removed += int(self.lists.pop(key, None) is not None)
            removed += int(self.sets.pop(key, None) is not None)
        return removed

    async def ping(self):
        return True

    async def aclose(self):
        self.closed = True


@pytest.mark.asyncio()
async def test_memory_frontier_is_fifo_and_keeps_duplicates():
    frontier = MemoryFrontier()
    assert await frontier.is_empty()
    assert await frontier.dequeue() is None
    for uri in ("a", "b", "a"):
        await frontier.enqueue(uri)
    assert len(frontier) == 3
    assert [await frontier.dequeue() for _ in range(4)] == ["a", "b", "a", None]
    assert await frontier.is_empty()


@pytest.mark.asyncio()
async def test_memory_visited_first_claim_wins():
    visited = MemoryVisitedSet()
    results = await asyncio.gather(*(visited.mark_visited("u") for _ in range(50)))
    assert results.count(True) == 1
    assert await visited.is_visited("u")
    assert not await visited.is_visited("v")
    assert "u" in visited


@pytest.mark.asyncio()
async def test_redis_frontier_uses_list_commands():
    client = FakeRedis()
    frontier = RedisFrontier(client, key_prefix="crawl1:")
    assert frontier.key == "crawl1:frontier-queue"
    await frontier.enqueue("https://x/a")
    await frontier.enqueue("https://x/b")
    assert not await frontier.is_empty()
    assert await frontier.dequeue() == "https://x/a"
    assert await frontier.dequeue() == "https://x/b"
    assert await frontier.dequeue() is None
    assert await frontier.is_empty()


@pytest.mark.asyncio()
async def test_redis_visited_claim_is_exclusive():
    client = FakeRedis()
    visited = RedisVisitedSet(client)
    assert visited.key == redis_store.VISITED_KEY
    results = await asyncio.gather(*(visited.mark_visited("https://x/") for _ in range(20)))
    assert results.count(True) == 1
    assert await visited.is_visited("https://x/")
    await visited.reset()
    assert not await visited.is_visited("https://x/")


@pytest.mark.asyncio()
async def test_connect_pings_and_closes_on_failure(monkeypatch):
    class DeadRedis(FakeRedis):
        async def ping(self):
            raise ConnectionError("refused")

    dead = DeadRedis()
    monkeypatch.setattr(redis_store.Redis, "from_url", staticmethod(lambda url, **kw: dead))

    with pytest.raises(ConnectionError):
        await redis_store.connect("redis://nowhere:6379")
    assert dead.closed


@pytest.mark.asyncio()
async def test_connect_returns_live_client(monkeypatch):
    live = FakeRedis()
    monkeypatch.setattr(redis_store.Redis, "from_url", staticmethod(lambda url, **kw: live))
    assert await redis_store.connect("redis://localhost:6379") is live
    assert not live.closed
