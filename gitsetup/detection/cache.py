"""Thread-safe LRU cache with per-entry expiry for detection results."""

import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

V = TypeVar("V")


class TTLCache(Generic[V]):
    """In-memory LRU cache whose entries expire after `ttl` seconds.

    Concurrent writers to the same key race; the last write wins.
    """

    def __init__(
        self,
        ttl: float,
        max_size: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self.max_size = max_size
        self._clock = clock
        self._entries: OrderedDict[Hashable, tuple[float, V]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> V | None:
        """Get an unexpired item, marking it most recently used."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            self._entries.move_to_end(key)
            return value

    def set(self, key: Hashable, value: V, ttl: float | None = None) -> None:
        """Store an item, evicting the least recently used when full.

        Args:
            key: Cache key
            value: Value to store
            ttl: Lifetime of this entry (defaults to the cache ttl)
        """
        lifetime = self.ttl if ttl is None else ttl
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
            self._entries[key] = (self._clock() + lifetime, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
