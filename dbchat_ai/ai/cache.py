"""Async caches used by the AI layer.

``TimedCache`` backs two things:

- the client façade's model cache, a flat map keyed ``"<model>_<service>"``
  with no expiry, and
- the enterprise SQL generator's result cache, whose entries expire after
  ``AI_RESULT_CACHE_TTL_MINUTES``.
"""

import asyncio
import time
from typing import Dict, Generic, List, Optional, Tuple, TypeVar

V = TypeVar("V")


class TimedCache(Generic[V]):
    """Cache with optional size bound and time-to-live.

    Attributes:
        max_size: Maximum number of entries (0 = unlimited). The oldest entry
            is evicted first when full.
        ttl: Seconds an entry stays valid (None = no expiry)
    """

    def __init__(self, max_size: int = 0, ttl: Optional[float] = None) -> None:
        """Initialize the cache.

        Args:
            max_size: Maximum number of entries (0 = unlimited)
            ttl: Time-to-live of entries in seconds
        """
        self._entries: Dict[str, Tuple[V, float]] = {}
        self._max_size = max_size
        self._ttl = ttl
        self._lock = asyncio.Lock()

    def _expired(self, stored_at: float) -> bool:
        return self._ttl is not None and time.monotonic() - stored_at >= self._ttl

    async def get(self, key: str) -> Optional[V]:
        """Get a value from the cache.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if missing or expired
        """
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._expired(stored_at):
                del self._entries[key]
                return None
            return value

    async def set(self, key: str, value: V) -> None:
        """Store a value in the cache.

        Args:
            key: Cache key
            value: Value to cache
        """
        async with self._lock:
            if key not in self._entries and self._max_size > 0 and len(self._entries) >= self._max_size:
                oldest_key = next(iter(self._entries))
                del self._entries[oldest_key]
            self._entries[key] = (value, time.monotonic())

    async def remove(self, key: str) -> None:
        """Remove a value from the cache.

        Args:
            key: Cache key
        """
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        """Drop every entry."""
        async with self._lock:
            self._entries.clear()

    async def has(self, key: str) -> bool:
        """Check if a live value is cached.

        Args:
            key: Cache key

        Returns:
            True if cached and not expired, False otherwise
        """
        return await self.get(key) is not None

    def keys(self) -> List[str]:
        """Get the keys currently held, expired ones included."""
        return list(self._entries)

    def size(self) -> int:
        """Get the current cache size."""
        return len(self._entries)
