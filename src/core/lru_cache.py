"""Bounded in-process LRU cache with a per-entry time-to-live."""

import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional


class LRUCache:
    """Least-recently-used cache holding at most ``max_size`` entries.

    Entries older than ``ttl_seconds`` are treated as missing and dropped on
    access. Reads refresh recency; inserting into a full cache evicts the
    least recently used entry.
    """

    def __init__(self, max_size: int, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[Hashable, tuple[Any, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def _expired(self, stored_at: float) -> bool:
        return self._clock() - stored_at > self.ttl_seconds

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value or None when absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._expired(stored_at):
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def set(self, key: Hashable, value: Any) -> None:
        """Store ``value`` under ``key`` and mark it most recently used."""
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
            self._entries[key] = (value, self._clock())

    def has(self, key: Hashable) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if self._expired(entry[1]):
                del self._entries[key]
                return False
            return True

    def delete(self, key: Hashable) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Number of live entries; expired ones are dropped first."""
        with self._lock:
            for key in [k for k, (_, stored_at) in self._entries.items() if self._expired(stored_at)]:
                del self._entries[key]
            return len(self._entries)


__all__ = ["LRUCache"]
