"""fast_cache

An in-process key/value cache with least-recently-used eviction and a fixed
time-to-live per entry. Expiration is lazy and amortized over cache
operations; no background thread is started.

The cache is not thread-safe. Wrap every call in your own lock when sharing
an instance between threads.
"""

from .cache import Cache, estimate_size
from .monitoring.metrics import RemovalReason
from .utils.config import CacheConfig, CacheConfigError

__all__ = [
    "Cache",
    "CacheConfig",
    "CacheConfigError",
    "RemovalReason",
    "estimate_size",
]

__version__ = "0.1.0"
