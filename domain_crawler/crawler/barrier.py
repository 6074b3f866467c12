# domain_crawler/crawler/barrier.py
"""
Reusable rendezvous barrier with a dynamic number of parties.

Parties can join (:meth:`Phaser.register`) and leave
(:meth:`Phaser.arrive_and_deregister`) at any time. Each generation ("phase")
ends when every registered party has arrived; all waiters are then released
together and the phase number advances. Every method runs without suspension
between reading and updating the counters, so on a single event loop the
bookkeeping is race-free.
"""
from __future__ import annotations

import asyncio
from typing import Optional

__all__ = ("Phaser",)


class Phaser:
    """Generation-counted barrier for asyncio tasks."""

    def __init__(self, parties: int = 0) -> None:
        if parties < 0:
            raise ValueError("parties must be >= 0")
        self._parties = parties
        self._arrived = 0
        self._phase = 0
        self._waiter: Optional[asyncio.Future[int]] = None

    def __repr__(self) -> str:
        return (
            f"<Phaser phase={self._phase} parties={self._parties} "
            f"arrived={self._arrived}>"
        )

    @property
    def phase(self) -> int:
        return self._phase

    @property
    def registered_parties(self) -> int:
        return self._parties

    @property
    def arrived_parties(self) -> int:
        return self._arrived

    def register(self) -> int:
        """Add one party to the current phase and return the phase number."""
        self._parties += 1
        return self._phase

    def arrive_and_deregister(self) -> int:
        """Arrive at the current phase and leave the barrier without waiting."""
        if self._parties - self._arrived <= 0:
            raise RuntimeError(f"arrive_and_deregister on {self!r} with no unarrived party")
        phase = self._phase
        self._parties -= 1
        if self._arrived > 0 and self._arrived >= self._parties:
            self._advance()
        return phase

    async def arrive_and_await_advance(self) -> int:
        """Arrive and wait until all registered parties have arrived.

        Returns the number of the new phase.
        """
        if self._parties - self._arrived <= 0:
            raise RuntimeError(f"arrive_and_await_advance on {self!r} with no unarrived party")
        self._arrived += 1
        if self._arrived >= self._parties:
            self._advance()
            return self._phase
        if self._waiter is None:
            self._waiter = asyncio.get_running_loop().create_future()
        # shield: a cancelled waiter must not cancel the shared future
        return await asyncio.shield(self._waiter)

    def _advance(self) -> None:
        self._arrived = 0
        self._phase += 1
        waiter, self._waiter = self._waiter, None
        if waiter is not None and not waiter.done():
            waiter.set_result(self._phase)
