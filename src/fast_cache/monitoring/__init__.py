from .metrics import (
    Counter,
    Histogram,
    RemovalReason,
    fast_cache_removals_total,
    fast_cache_requests_total,
    fast_cache_sweep_removed_entries,
    reset_all,
)

__all__ = [
    "Counter",
    "Histogram",
    "RemovalReason",
    "fast_cache_requests_total",
    "fast_cache_removals_total",
    "fast_cache_sweep_removed_entries",
    "reset_all",
]
