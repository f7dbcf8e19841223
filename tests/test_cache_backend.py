from __future__ import annotations

import pytest

from highseas.cache_backend import TTLCache


def test_round_trip_and_expiry(clock):
    cache = TTLCache(ttl_seconds=300, timer=clock)
    cache.set("k", [1, 2])
    assert cache.get("k") == [1, 2]

    clock.advance(299)
    assert cache.get("k") == [1, 2]

    clock.advance(1)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_reset_extends_lifetime(clock):
    cache = TTLCache(ttl_seconds=10, timer=clock)
    cache.set("k", "v1")
    clock.advance(8)
    cache.set("k", "v2")
    clock.advance(8)
    assert cache.get("k") == "v2"


def test_capacity_evicts_oldest_set(clock):
    cache = TTLCache(ttl_seconds=60, max_entries=2, timer=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)   # re-set moves "a" to newest
    cache.set("c", 3)

    assert cache.get("b") is None
    assert cache.get("a") == 10
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_delete_and_clear(clock):
    cache = TTLCache(ttl_seconds=60, timer=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    assert "a" not in cache
    assert "b" in cache
    cache.clear()
    assert len(cache) == 0


@pytest.mark.parametrize("kwargs", [{"ttl_seconds": 0}, {"ttl_seconds": 5, "max_entries": 0}])
def test_invalid_settings_rejected(kwargs):
    with pytest.raises(ValueError):
        TTLCache(**kwargs)
