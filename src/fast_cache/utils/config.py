from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional


class CacheConfigError(ValueError):
    """Raised when a cache is configured with values it cannot honor."""


@dataclass
class CacheConfig:
    max_size: int = 1000
    ttl_seconds: float = 60.0
    expire_interval: int = 100
    max_mem_bytes: Optional[int] = None
    name: str = "default"
    metrics_enabled: bool = False

    def __post_init__(self) -> None:
        if not _is_int(self.max_size) or self.max_size <= 0:
            raise CacheConfigError(f"max_size must be a positive integer, got {self.max_size!r}")
        if not _is_int(self.expire_interval) or self.expire_interval <= 0:
            raise CacheConfigError(f"expire_interval must be a positive integer, got {self.expire_interval!r}")
        if isinstance(self.ttl_seconds, bool) or not isinstance(self.ttl_seconds, (int, float)):
            raise CacheConfigError(f"ttl_seconds must be a number, got {self.ttl_seconds!r}")
        if math.isnan(self.ttl_seconds) or self.ttl_seconds < 0:
            raise CacheConfigError(f"ttl_seconds must be a non-negative number, got {self.ttl_seconds!r}")
        if self.max_mem_bytes is not None and (not _is_int(self.max_mem_bytes) or self.max_mem_bytes <= 0):
            raise CacheConfigError(f"max_mem_bytes must be a positive integer or None, got {self.max_mem_bytes!r}")
        self.ttl_seconds = float(self.ttl_seconds)

    @property
    def mem_threshold(self) -> Optional[float]:
        """Usage level eviction drains down to when memory tracking is on."""
        if self.max_mem_bytes is None:
            return None
        return self.max_mem_bytes * 0.75

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheConfig":
        return cls(**data)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
