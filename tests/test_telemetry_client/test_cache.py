"""Tests for telemetry_client.cache."""

from __future__ import annotations

from telemetry_client.cache import TTLCache, cache_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestTTLCache:
    def test_get_before_expiry(self):
        clock = FakeClock()
        cache = TTLCache(ttl_s=300, clock=clock)
        cache.set("k", [1, 2])
        clock.now += 299
        assert cache.get("k") == [1, 2]

    def test_expires(self):
        clock = FakeClock()
        cache = TTLCache(ttl_s=300, clock=clock)
        cache.set("k", [1, 2])
        clock.now += 300
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_missing_key(self):
        assert TTLCache().get("nope") is None

    def test_clear(self):
        cache = TTLCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0

    def test_instances_are_independent(self):
        first, second = TTLCache(), TTLCache()
        first.set("k", 1)
        assert second.get("k") is None


class TestCacheKey:
    def test_params_sorted(self):
        assert cache_key("u", {"b": 2, "a": 1}) == cache_key("u", {"a": 1, "b": 2}) == "u?a=1&b=2"

    def test_no_params(self):
        assert cache_key("u") == "u"
