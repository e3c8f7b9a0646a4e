"""Tests for the bounded TTL cache."""

import pytest

from mailvet.core.cache import TTLCache
from tests.fakes import FakeClock


@pytest.fixture
def clock():
    return FakeClock()


class TestTTLCache:
    """Tests for TTLCache."""

    def test_get_returns_stored_value(self, clock):
        """Should return a value set within its TTL."""
        cache: TTLCache[str] = TTLCache(max_size=10, ttl_seconds=60, clock=clock)
        cache.set("a", "value")

        assert cache.get("a") == "value"
        assert cache.has("a") is True

    def test_miss_returns_none(self, clock):
        """Unknown keys are misses."""
        cache: TTLCache[str] = TTLCache(max_size=10, ttl_seconds=60, clock=clock)

        assert cache.get("missing") is None
        assert cache.has("missing") is False

    def test_expired_entry_is_removed_on_get(self, clock):
        """An entry past its TTL behaves as a miss and is dropped."""
        cache: TTLCache[str] = TTLCache(max_size=10, ttl_seconds=60, clock=clock)
        cache.set("a", "value")

        clock.advance(60)

        assert cache.get("a") is None
        assert len(cache) == 0

    def test_entry_alive_just_before_expiry(self, clock):
        cache: TTLCache[str] = TTLCache(max_size=10, ttl_seconds=60, clock=clock)
        cache.set("a", "value")

        clock.advance(59.9)

        assert cache.get("a") == "value"

    def test_capacity_evicts_oldest_inserted(self, clock):
        """Inserting past capacity makes the oldest entry a miss."""
        cache: TTLCache[int] = TTLCache(max_size=3, ttl_seconds=60, clock=clock)
        for i, key in enumerate(["a", "b", "c"]):
            cache.set(key, i)

        cache.set("d", 3)

        assert cache.get("a") is None
        assert cache.get("b") == 1
        assert cache.get("c") == 2
        assert cache.get("d") == 3
        assert len(cache) == 3

    def test_reads_do_not_protect_from_eviction(self, clock):
        """Eviction is insertion-ordered, not least-recently-read."""
        cache: TTLCache[int] = TTLCache(max_size=2, ttl_seconds=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")

        cache.set("c", 3)

        assert cache.get("a") is None
        assert cache.get("b") == 2

    def test_reset_moves_key_to_newest(self, clock):
        """Re-setting a key refreshes its position and expiry."""
        cache: TTLCache[int] = TTLCache(max_size=2, ttl_seconds=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)

        cache.set("c", 3)

        assert cache.get("a") == 10
        assert cache.get("b") is None

    def test_reset_refreshes_expiry(self, clock):
        cache: TTLCache[int] = TTLCache(max_size=2, ttl_seconds=60, clock=clock)
        cache.set("a", 1)
        clock.advance(50)
        cache.set("a", 2)
        clock.advance(50)

        assert cache.get("a") == 2

    def test_expired_entries_purged_before_evicting_live_ones(self, clock):
        """At capacity, dead entries make room before any live entry is evicted."""
        cache: TTLCache[int] = TTLCache(max_size=2, ttl_seconds=60, clock=clock)
        cache.set("old", 1)
        clock.advance(30)
        cache.set("live", 2)
        clock.advance(31)  # "old" expired, "live" still valid

        cache.set("new", 3)

        assert cache.get("live") == 2
        assert cache.get("new") == 3

    def test_clear_and_delete(self, clock):
        cache: TTLCache[int] = TTLCache(max_size=5, ttl_seconds=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.delete("a")
        assert cache.get("a") is None
        assert len(cache) == 1

        cache.clear()
        assert len(cache) == 0

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            TTLCache(max_size=0)
