from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


class RemovalReason(str, enum.Enum):
    DELETED = "deleted"
    EVICTED = "evicted"
    EXPIRED = "expired"
    REPLACED = "replaced"
    CLEARED = "cleared"


@dataclass
class Counter:
    name: str
    help: str
    values: Dict[Tuple, float] = field(default_factory=dict)

    def inc(self, value: float = 1.0, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        self.values[key] = self.values.get(key, 0.0) + value

    def get(self, **labels: Any) -> float:
        key = tuple(sorted(labels.items()))
        return self.values.get(key, 0.0)

    def reset(self) -> None:
        self.values.clear()


@dataclass
class Histogram:
    name: str
    help: str
    buckets: List[float]
    counts: Dict[Tuple, List[int]] = field(default_factory=dict)

    def observe(self, val: float, **labels: Any) -> None:
        key = tuple(sorted(labels.items()))
        if key not in self.counts:
            self.counts[key] = [0 for _ in self.buckets]
        for i, b in enumerate(self.buckets):
            if val <= b:
                self.counts[key][i] += 1
                break

    def get(self, **labels: Any) -> List[int]:
        key = tuple(sorted(labels.items()))
        return list(self.counts.get(key, [0 for _ in self.buckets]))

    def reset(self) -> None:
        self.counts.clear()


# Predefined metrics
fast_cache_requests_total = Counter("fast_cache_requests_total", "Cache lookups by result (hit/miss)")
fast_cache_removals_total = Counter("fast_cache_removals_total", "Entries removed by reason")
fast_cache_sweep_removed_entries = Histogram(
    "fast_cache_sweep_removed_entries",
    "Entries removed per expiration sweep",
    buckets=[0, 1, 10, 100, 1000, 10000, float("inf")],
)


def reset_all() -> None:
    fast_cache_requests_total.reset()
    fast_cache_removals_total.reset()
    fast_cache_sweep_removed_entries.reset()
