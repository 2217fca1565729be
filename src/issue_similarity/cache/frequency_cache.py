"""
Per-corpus cache of document-frequency statistics with a time-to-live.

Expiry is checked lazily on read; a stale entry is recomputed on next use.
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from ..models.scoring import CorpusFrequencies


class FrequencyCache:
    """
    Thread-safe corpus key → CorpusFrequencies mapping.

    Args:
        ttl_seconds: Age after which an entry is considered stale
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, CorpusFrequencies]] = {}
        self._lock = threading.Lock()

    def get(self, corpus_key: str) -> Optional[CorpusFrequencies]:
        """Return the cached statistics, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(corpus_key)
            if entry is None:
                return None
            stored_at, frequencies = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[corpus_key]
                return None
            return frequencies

    def put(self, frequencies: CorpusFrequencies) -> None:
        with self._lock:
            self._entries[frequencies.corpus_key] = (self._clock(), frequencies)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
