"""
In-memory TTL cache used for ship groups and person profiles.

Entries expire lazily on read.  When a cache is full, the entry that was
set longest ago is evicted to make room.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from typing import Callable, Generic, Hashable, Optional, Tuple, TypeVar

V = TypeVar("V")


class TTLCache(Generic[V]):
    """Bounded, thread-safe key/value cache with a per-cache TTL.

    Parameters
    ----------
    ttl_seconds:
        Lifetime of each entry, counted from its last ``set``.
    max_entries:
        Capacity bound; ``None`` means unbounded.
    timer:
        Monotonic clock, injectable so tests can step time.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: Optional[int] = None,
        timer: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._timer = timer
        self._store: "OrderedDict[Hashable, Tuple[V, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[V]:
        now = self._timer()
        with self._lock:
            hit = self._store.get(key)
            if hit is None:
                return None
            value, expires_at = hit
            if now >= expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: Hashable, value: V) -> None:
        expires_at = self._timer() + self.ttl_seconds
        with self._lock:
            # Re-setting moves the key to the newest position.
            self._store.pop(key, None)
            self._store[key] = (value, expires_at)
            if self.max_entries is not None:
                while len(self._store) > self.max_entries:
                    self._store.popitem(last=False)

    def delete(self, key: Hashable) -> bool:
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet read."""
        with self._lock:
            return len(self._store)
