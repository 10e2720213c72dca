from __future__ import annotations

import logging
import time
import typing as t

from ..monitoring.metrics import (
    RemovalReason,
    fast_cache_removals_total,
    fast_cache_requests_total,
    fast_cache_sweep_removed_entries,
)
from ..utils.config import CacheConfig
from .entry import Entry, Sizer, estimate_size
from .indexes import ExpiryIndex, RecencyIndex

_logger = logging.getLogger(__name__)

EvictCallback = t.Callable[[t.Any], None]
Clock = t.Callable[[], float]


class Cache:
    """In-process cache with LRU and TTL expiration semantics.

    Not thread-safe, and no background thread cleans up expired values.
    Expiration happens instead:

    1. on every read, against the entry being read. An expired entry is
       removed and reported as absent;
    2. every ``expire_interval`` reads or writes, as a sweep that removes every
       entry expired up to that point;
    3. on demand via :meth:`expire`.

    When ``max_mem_bytes`` is set the cache also tracks an estimate of its
    memory footprint and evicts least recently used entries until usage is
    back under 75% of that ceiling.

    Example::

        cache = Cache(max_size=1_000_000, ttl_seconds=60 * 60)
        value = cache.fetch("key", lambda: expensive_computation())
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float = 60.0,
        expire_interval: int = 100,
        max_mem_bytes: t.Optional[int] = None,
        *,
        on_evict: t.Optional[EvictCallback] = None,
        sizer: t.Optional[Sizer] = None,
        clock: t.Optional[Clock] = None,
        name: str = "default",
        metrics_enabled: bool = False,
    ) -> None:
        self._config = CacheConfig(
            max_size=max_size,
            ttl_seconds=ttl_seconds,
            expire_interval=expire_interval,
            max_mem_bytes=max_mem_bytes,
            name=name,
            metrics_enabled=metrics_enabled,
        )
        self._max_size = self._config.max_size
        self._ttl = self._config.ttl_seconds
        self._expire_interval = self._config.expire_interval
        self._mem_threshold = self._config.mem_threshold
        self._metrics = self._config.metrics_enabled
        self._on_evict = on_evict
        self._sizer: Sizer = sizer or estimate_size
        self._clock: Clock = clock or time.time

        self._recency: RecencyIndex = RecencyIndex()
        self._expiry: ExpiryIndex = ExpiryIndex()
        self._op_count = 0
        self._mem_used = 0
        self._pending: t.List[t.Any] = []

        _logger.debug(
            "Cache %s created: max_size=%d ttl=%.3fs expire_interval=%d max_mem_bytes=%s",
            name,
            self._max_size,
            self._ttl,
            self._expire_interval,
            max_mem_bytes,
        )

    @classmethod
    def from_config(
        cls,
        config: CacheConfig,
        on_evict: t.Optional[EvictCallback] = None,
        sizer: t.Optional[Sizer] = None,
        clock: t.Optional[Clock] = None,
    ) -> "Cache":
        return cls(
            max_size=config.max_size,
            ttl_seconds=config.ttl_seconds,
            expire_interval=config.expire_interval,
            max_mem_bytes=config.max_mem_bytes,
            on_evict=on_evict,
            sizer=sizer,
            clock=clock,
            name=config.name,
            metrics_enabled=config.metrics_enabled,
        )

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def mem_used(self) -> int:
        """Estimated bytes held by live entries; 0 when memory tracking is off."""
        return self._mem_used

    def get(self, key: t.Hashable) -> t.Tuple[bool, t.Any]:
        """Look up ``key``, returning ``(found, value)``.

        A hit marks the key as most recently used. An expired entry is removed
        and reported exactly like a key that was never stored.
        """
        now = self._clock()
        self._tick(now)
        entry = self._recency.get(key)
        if entry is None:
            found, value = False, None
        elif entry.is_expired(now):
            self._recency.pop(key)
            self._release(key, entry, RemovalReason.EXPIRED)
            found, value = False, None
        else:
            self._recency.touch(key)
            found, value = True, entry.value
        if self._metrics:
            fast_cache_requests_total.inc(cache=self._config.name, result="hit" if found else "miss")
        self._notify()
        return found, value

    def fetch(self, key: t.Hashable, compute: t.Callable[[], t.Any]) -> t.Any:
        """Return the cached value for ``key``, computing and storing it on a miss.

        ``compute`` is called at most once and never on a hit. If it raises,
        nothing is stored.
        """
        found, value = self.get(key)
        if found:
            return value
        return self._store(key, compute(), self._clock())

    def set(self, key: t.Hashable, value: t.Any) -> t.Any:
        now = self._clock()
        self._tick(now)
        return self._store(key, value, now)

    def delete(self, key: t.Hashable) -> t.Any:
        """Remove ``key`` and return its value, or ``None`` when absent or expired."""
        entry = self._recency.pop(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            self._release(key, entry, RemovalReason.EXPIRED)
            value = None
        else:
            self._release(key, entry, RemovalReason.DELETED)
            value = entry.value
        self._notify()
        return value

    def clear(self) -> "Cache":
        removed = len(self._recency)
        if self._on_evict is not None:
            self._pending.extend(entry.value for _, entry in self._recency.items())
        self._recency.clear()
        self._expiry.clear()
        self._mem_used = 0
        if self._metrics and removed:
            fast_cache_removals_total.inc(removed, cache=self._config.name, reason=RemovalReason.CLEARED.value)
        _logger.debug("Cache %s cleared %d entries", self._config.name, removed)
        self._notify()
        return self

    def count(self) -> int:
        """Number of entries held, including expired ones not yet cleaned up.

        Does not count as an operation towards ``expire_interval``.
        """
        return len(self._recency)

    size = count
    length = count

    def empty(self) -> bool:
        return self.count() == 0

    is_empty = empty

    def expire(self) -> "Cache":
        """Remove every expired entry now."""
        self._sweep(self._clock())
        self._notify()
        return self

    def iterate(self) -> t.List[t.Tuple[t.Any, t.Any]]:
        """Snapshot of live ``(key, value)`` pairs, least recently used first.

        Expired entries are removed first. The snapshot is not affected by
        later changes to the cache, though its values may expire by the time
        they are used. This materializes the whole cache, so it is expensive.
        """
        self.expire()
        return [(key, entry.value) for key, entry in self._recency.items()]

    def __getitem__(self, key: t.Hashable) -> t.Any:
        _, value = self.get(key)
        return value

    def __setitem__(self, key: t.Hashable, value: t.Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: t.Hashable) -> None:
        if key not in self._recency:
            raise KeyError(key)
        self.delete(key)

    def __contains__(self, key: object) -> bool:
        entry = self._recency.get(key)  # type: ignore[arg-type]
        return entry is not None and not entry.is_expired(self._clock())

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> t.Iterator[t.Tuple[t.Any, t.Any]]:
        return iter(self.iterate())

    def __repr__(self) -> str:
        return f"<fast_cache.Cache count={self.count()} max_size={self._max_size} ttl={self._ttl!r}>"

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _store(self, key: t.Hashable, value: t.Any, now: float) -> t.Any:
        size = self._sizer(value) if self._mem_threshold is not None else 0
        entry = Entry(value=value, expires_at=now + self._ttl, size_estimate=size)
        previous = self._recency.put(key, entry)
        if previous is not None:
            self._release(key, previous, RemovalReason.REPLACED)
        self._expiry.register(entry, key)
        if self._mem_threshold is not None:
            footprint = estimate_size(key) + size
            self._mem_used += footprint
            if footprint > self._mem_threshold:
                _logger.warning(
                    "Cache %s: entry of %d bytes exceeds memory threshold of %d bytes and will be evicted",
                    self._config.name,
                    footprint,
                    int(self._mem_threshold),
                )
        self._shrink()
        self._notify()
        return value

    def _release(self, key: t.Hashable, entry: Entry, reason: RemovalReason) -> None:
        """Drop accounting for an entry already popped from the recency index."""
        self._expiry.unregister(entry)
        if self._mem_threshold is not None:
            self._mem_used -= estimate_size(key) + entry.size_estimate
        if self._metrics:
            fast_cache_removals_total.inc(cache=self._config.name, reason=reason.value)
        if self._on_evict is not None:
            self._pending.append(entry.value)

    def _shrink(self) -> None:
        while self._recency and self._over_capacity():
            key, entry = self._recency.evict_oldest()
            self._release(key, entry, RemovalReason.EVICTED)

    def _over_capacity(self) -> bool:
        if len(self._recency) > self._max_size:
            return True
        return self._mem_threshold is not None and self._mem_used > self._mem_threshold

    def _tick(self, now: float) -> None:
        self._op_count += 1
        if self._op_count >= self._expire_interval:
            self._op_count = 0
            self._sweep(now)

    def _sweep(self, now: float) -> None:
        removed = 0
        while True:
            oldest = self._expiry.peek_oldest()
            if oldest is None:
                break
            entry, key = oldest
            if not entry.is_expired(now):
                break
            self._recency.pop(key)
            self._release(key, entry, RemovalReason.EXPIRED)
            removed += 1
        if removed:
            _logger.debug("Cache %s expired %d entries", self._config.name, removed)
        if self._metrics:
            fast_cache_sweep_removed_entries.observe(removed, cache=self._config.name)

    def _notify(self) -> None:
        if not self._pending:
            return
        values, self._pending = self._pending, []
        for value in values:
            self._on_evict(value)  # type: ignore[misc]
