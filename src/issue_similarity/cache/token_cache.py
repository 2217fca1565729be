"""
Bounded memoization caches.

Eviction is by insertion order: when full, the entry inserted earliest is
dropped, regardless of how recently it was read. Entries are pure
recomputations, so clearing a cache never changes results.
"""

import threading
from typing import Any, Dict, Optional


class BoundedCache:
    """
    Thread-safe mapping with a fixed capacity and insertion-order eviction.
    """

    def __init__(self, max_size: int):
        if max_size < 1:
            raise ValueError(f"Cache max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._entries: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._entries.get(key)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            if key in self._entries:
                return
            if len(self._entries) >= self.max_size:
                # dicts keep insertion order, so the first key is the oldest
                oldest = next(iter(self._entries))
                del self._entries[oldest]
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class TokenCache(BoundedCache):
    """
    Word → stem memoization shared by every stemmer call in the process.
    """

    def __init__(self, max_size: int = 1000):
        super().__init__(max_size)
