"""Shared fixtures for unit tests."""

from __future__ import annotations

import typing as t

import pytest

from fast_cache import Cache
from fast_cache.cache.entry import estimate_size
from fast_cache.monitoring import metrics


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """A frozen clock that tests move forward explicitly."""
    return FakeClock()


@pytest.fixture
def make_cache(clock):
    """Factory for caches bound to the fake clock."""

    def factory(*args: t.Any, **kwargs: t.Any) -> Cache:
        kwargs.setdefault("clock", clock)
        return Cache(*args, **kwargs)

    return factory


@pytest.fixture
def populated_cache(make_cache):
    """Cache holding a=1, b=2, c=3 with a sweep on every operation."""
    cache = make_cache(3, 60, 1)
    cache["a"] = 1
    cache["b"] = 2
    cache["c"] = 3
    return cache


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset_all()
    yield
    metrics.reset_all()


@pytest.fixture
def check_invariants():
    """Assert the recency and expiry indexes agree with each other and with accounting."""

    def check(cache: Cache) -> None:
        recency = cache._recency.items()
        expiry = cache._expiry.items()

        assert len(recency) == len(expiry)
        reverse = dict(expiry)
        for key, entry in recency:
            assert reverse.get(entry) == key
        for entry, key in expiry:
            assert cache._recency.get(key) is entry

        deadlines = [entry.expires_at for entry, _ in expiry]
        assert deadlines == sorted(deadlines)

        assert cache.count() <= cache.config.max_size
        if cache.config.max_mem_bytes is not None:
            expected = sum(estimate_size(key) + entry.size_estimate for key, entry in recency)
            assert cache.mem_used == expected
            assert cache.mem_used <= 0.75 * cache.config.max_mem_bytes
        else:
            assert cache.mem_used == 0

    return check
