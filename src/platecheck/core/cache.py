"""In-process response cache and cooperative rate limiter for sources."""

import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class ResponseCache:
    """TTL cache keyed by canonical plate.

    Features:
    - LRU eviction when full
    - TTL-based expiration
    - Single-key writes only; last write wins
    """

    def __init__(
        self,
        default_ttl: float = 3600,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache.

        Args:
            default_ttl: Time-to-live in seconds
            max_size: Maximum number of entries before LRU eviction
            clock: Monotonic time source (injectable for tests)
        """
        self.default_ttl = default_ttl
        self.max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()

        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self.misses += 1
            return None

        expires_at, value = entry
        if self._clock() >= expires_at:
            self._entries.pop(key, None)
            self.misses += 1
            return None

        self._entries.move_to_end(key)
        self.hits += 1
        return value

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a value with the default or given TTL."""
        if len(self._entries) >= self.max_size and key not in self._entries:
            self._entries.popitem(last=False)
            self.evictions += 1

        self._entries[key] = (self._clock() + (self.default_ttl if ttl is None else ttl), value)
        self._entries.move_to_end(key)

    def clear(self) -> None:
        self._entries.clear()

    def cleanup_expired(self) -> int:
        """Remove expired entries, returning how many were dropped."""
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Dropped %d expired cache entries", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def get_stats(self) -> dict[str, Any]:
        total = self.hits + self.misses
        hit_rate = (self.hits / total * 100) if total else 0
        return {
            "size": len(self._entries),
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": f"{hit_rate:.1f}%",
            "evictions": self.evictions,
        }


class RateLimiter:
    """Minimum spacing between requests, shared by every caller.

    Each caller reserves the next free slot before sleeping, so concurrent
    callers queue up one interval apart. There is no await between reading
    and writing the slot, which keeps this safe on one event loop without a lock.
    """

    def __init__(
        self,
        min_interval: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._next_slot = 0.0

    def reserve(self) -> float:
        """Claim the next slot and return how long to wait for it."""
        now = self._clock()
        slot = max(now, self._next_slot)
        self._next_slot = slot + self.min_interval
        return slot - now

    def release(self) -> None:
        """Give back the most recent slot when its request never ran."""
        self._next_slot = max(self._clock(), self._next_slot - self.min_interval)

    async def wait(self) -> None:
        delay = self.reserve()
        if delay > 0:
            logger.debug("Rate limit: waiting %.2fs", delay)
            try:
                await asyncio.sleep(delay)
            except asyncio.CancelledError:
                self.release()
                raise
