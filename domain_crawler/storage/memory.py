# domain_crawler/storage/memory.py
"""
In-process frontier and visited set.

Each coroutine method completes without suspending, so on one event loop every
operation is atomic with respect to all other tasks.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Optional, Set


class MemoryFrontier:
    """FIFO frontier backed by a deque."""

    def __init__(self, initial: Iterable[str] = ()) -> None:
        self._queue: Deque[str] = deque(initial)

    async def enqueue(self, uri: str) -> None:
        self._queue.append(uri)

    async def dequeue(self) -> Optional[str]:
        return self._queue.popleft() if self._queue else None

    async def is_empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)

    def snapshot(self) -> list[str]:
        return list(self._queue)


class MemoryVisitedSet:
    """Visited set backed by a Python set."""

    def __init__(self) -> None:
        self._seen: Set[str] = set()

    async def mark_visited(self, uri: str) -> bool:
        if uri in self._seen:
            return False
        self._seen.add(uri)
        return True

    async def is_visited(self, uri: str) -> bool:
        return uri in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, uri: object) -> bool:
        return uri in self._seen
