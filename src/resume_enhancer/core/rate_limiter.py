"""Fixed-window rate limiting for unauthenticated endpoints.

The shipped store is process-local memory, so limits reset on restart and are
not shared between instances. Swap in a shared ``RateLimitStore`` for
multi-instance deployments.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Protocol

import structlog

logger = structlog.get_logger()


@dataclass
class RateLimitEntry:
    count: int
    reset_at: float  # monotonic milliseconds


class RateLimitStore(Protocol):
    """Storage capability used by :class:`RateLimiter`."""

    def get(self, key: str) -> RateLimitEntry | None: ...

    def set(self, key: str, entry: RateLimitEntry) -> None: ...

    def sweep(self, now: float) -> int:
        """Drop entries whose window ended before ``now``; return how many."""
        ...


class InMemoryRateLimitStore:
    """Dict-backed store for a single process."""

    def __init__(self):
        self._entries: dict[str, RateLimitEntry] = {}

    def get(self, key: str) -> RateLimitEntry | None:
        return self._entries.get(key)

    def set(self, key: str, entry: RateLimitEntry) -> None:
        self._entries[key] = entry

    def sweep(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.reset_at < now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class RateLimiter:
    """Counts attempts per key within a window."""

    def __init__(
        self,
        store: RateLimitStore | None = None,
        clock: Callable[[], float] = _monotonic_ms,
    ):
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.clock = clock

    def allow(self, key: str, max_attempts: int, window_ms: float) -> bool:
        """Record an attempt for ``key`` and report whether it is allowed."""
        now = self.clock()
        entry = self.store.get(key)

        if entry is None or entry.reset_at < now:
            self.store.set(key, RateLimitEntry(count=1, reset_at=now + window_ms))
            return True

        if entry.count < max_attempts:
            entry.count += 1
            self.store.set(key, entry)
            return True

        return False

    def remaining(self, key: str, max_attempts: int) -> tuple[int, float | None]:
        """Return (attempts left, milliseconds until reset or None)."""
        now = self.clock()
        entry = self.store.get(key)
        if entry is None or entry.reset_at < now:
            return max_attempts, None
        return max(0, max_attempts - entry.count), entry.reset_at - now

    def sweep(self) -> int:
        return self.store.sweep(self.clock())


async def run_sweeper(limiter: RateLimiter, interval_seconds: float = 60.0) -> None:
    """Periodically evict expired entries until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = limiter.sweep()
        if removed:
            logger.debug("rate_limit_sweep", removed=removed)
