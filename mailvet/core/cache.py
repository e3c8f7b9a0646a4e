"""Bounded in-memory cache with per-entry expiry."""

import time
from typing import Generic, TypeVar
from collections.abc import Callable


V = TypeVar("V")


class TTLCache(Generic[V]):
    """
    Key/value store with a fixed TTL per entry and a capacity bound.

    Eviction is by insertion order: when a new key arrives at capacity, expired
    entries are purged first and then the oldest inserted entry is dropped.
    Reads do not refresh an entry's position.

    Operations never await, so a single event loop needs no lock. Guard the
    instance with a lock before sharing it across threads.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of live entries
            ttl_seconds: Lifetime of each entry from insertion
            clock: Monotonic time source, injectable for tests
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[V, float]] = {}

    def get(self, key: str) -> V | None:
        """Return the cached value, or None on a miss or expired entry."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            # Expired - remove from cache
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: V) -> None:
        """Insert or replace a value, evicting the oldest entry at capacity."""
        if key in self._entries:
            # Re-insert so the key moves to the newest position
            del self._entries[key]
        elif len(self._entries) >= self.max_size:
            self._purge_expired()
            if len(self._entries) >= self.max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]

        self._entries[key] = (value, self._clock() + self.ttl_seconds)

    def has(self, key: str) -> bool:
        """Check whether a live entry exists for key."""
        return self.get(key) is not None

    def delete(self, key: str) -> None:
        """Remove an entry if present."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
