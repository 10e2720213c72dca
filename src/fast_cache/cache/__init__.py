from .entry import Entry, estimate_size
from .indexes import ExpiryIndex, RecencyIndex
from .lru_ttl import Cache

__all__ = [
    "Cache",
    "Entry",
    "ExpiryIndex",
    "RecencyIndex",
    "estimate_size",
]
