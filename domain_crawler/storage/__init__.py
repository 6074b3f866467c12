"""domain_crawler.storage: frontier and visited-set backends."""

from domain_crawler.storage.memory import MemoryFrontier, MemoryVisitedSet
from domain_crawler.storage.redis_store import RedisFrontier, RedisVisitedSet

__all__ = ["MemoryFrontier", "MemoryVisitedSet", "RedisFrontier", "RedisVisitedSet"]
