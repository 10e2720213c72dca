from __future__ import annotations

import typing as t
from collections import OrderedDict

from .entry import Entry

K = t.TypeVar("K", bound=t.Hashable)


class RecencyIndex(t.Generic[K]):
    """Key -> entry mapping kept in least- to most-recently-used order."""

    def __init__(self) -> None:
        self._data: "OrderedDict[K, Entry]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def get(self, key: K) -> t.Optional[Entry]:
        return self._data.get(key)

    def put(self, key: K, entry: Entry) -> t.Optional[Entry]:
        """Store ``entry`` at the newest position and return the entry it replaced."""
        previous = self._data.pop(key, None)
        self._data[key] = entry
        return previous

    def pop(self, key: K) -> t.Optional[Entry]:
        return self._data.pop(key, None)

    def touch(self, key: K) -> None:
        if key in self._data:
            self._data.move_to_end(key)

    def evict_oldest(self) -> t.Tuple[K, Entry]:
        """Remove and return the least recently used pair.

        Raises ``KeyError`` when the index is empty.
        """
        return self._data.popitem(last=False)

    def items(self) -> t.List[t.Tuple[K, Entry]]:
        return list(self._data.items())

    def clear(self) -> None:
        self._data.clear()


class ExpiryIndex(t.Generic[K]):
    """Entry -> key mapping kept in creation order.

    With a TTL that is constant per cache, creation order is also expiry
    order, so the oldest registration is always the first to expire.
    """

    def __init__(self) -> None:
        self._data: "OrderedDict[Entry, K]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, entry: object) -> bool:
        return entry in self._data

    def register(self, entry: Entry, key: K) -> None:
        self._data[entry] = key

    def unregister(self, entry: Entry) -> None:
        self._data.pop(entry, None)

    def peek_oldest(self) -> t.Optional[t.Tuple[Entry, K]]:
        if not self._data:
            return None
        entry = next(iter(self._data))
        return entry, self._data[entry]

    def items(self) -> t.List[t.Tuple[Entry, K]]:
        return list(self._data.items())

    def clear(self) -> None:
        self._data.clear()
