from __future__ import annotations

import json
import sys
import typing as t
from dataclasses import dataclass, field

Sizer = t.Callable[[t.Any], int]

# Flat cost charged for scalars that have no meaningful serialized length.
PRIMITIVE_SIZE = 8


def estimate_size(value: t.Any) -> int:
    """Approximate the number of bytes ``value`` occupies.

    Scalars get a small constant, text is measured as UTF-8, binary data by
    length, and anything else by the length of its JSON rendering.
    """
    if value is None or isinstance(value, (bool, int, float)):
        return PRIMITIVE_SIZE
    if isinstance(value, str):
        return len(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray, memoryview)):
        return len(value)
    try:
        return len(json.dumps(value, default=repr).encode("utf-8"))
    except (TypeError, ValueError):
        # circular structures
        return sys.getsizeof(value)


@dataclass(eq=False)
class Entry:
    """A stored value and its expiry deadline.

    ``eq=False`` keeps the default identity hash so two entries holding equal
    values stay distinct keys in the expiry index.
    """

    value: t.Any
    expires_at: float
    size_estimate: int = field(default=0)

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now
