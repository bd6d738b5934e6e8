"""Size-bounded memoization cache with first-in, first-out eviction."""

import logging
import threading
from collections import OrderedDict
from typing import Dict, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class FifoCache(Generic[V]):
    """Insertion-ordered cache that evicts the oldest inserted key.

    Reads never change an entry's position, so this is not an LRU cache:
    a key that is hit constantly is still evicted once ``max_size`` newer
    keys have been inserted after it.
    """

    def __init__(self, max_size: int = 128):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._entries: "OrderedDict[Hashable, V]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Hashable) -> Optional[V]:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, key: Hashable, value: V) -> V:
        """Insert ``value`` unless ``key`` is already present.

        Returns the value stored under ``key`` afterwards, which is the
        existing one when another caller inserted first.
        """
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = value
            if len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self.evictions += 1
                logger.debug("Evicted cache entry %s", evicted)
            return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def keys(self) -> list:
        with self._lock:
            return list(self._entries.keys())

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def info(self) -> Dict[str, int]:
        """Counters for diagnostics: hits, misses, evictions, size, max_size."""
        with self._lock:
            return {
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
                "size": len(self._entries),
                "max_size": self.max_size,
            }
