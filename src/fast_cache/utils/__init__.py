"""Configuration helpers for fast_cache."""

from .config import CacheConfig, CacheConfigError

__all__ = [
    "CacheConfig",
    "CacheConfigError",
]
