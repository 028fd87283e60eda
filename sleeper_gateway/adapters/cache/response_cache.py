"""TTL + LRU bounded cache for upstream responses."""

import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple

import structlog

logger = structlog.get_logger()


class ResponseCache:
    """In-memory response cache keyed by request URL.

    Entries expire ``ttl_seconds`` after insertion. When a new key would push
    the cache past ``max_entries``, expired entries are purged first and then
    the least recently used entries are evicted. Reads refresh recency but not
    the insertion timestamp.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (value, inserted_at); order is least to most recently used
        self._entries: "OrderedDict[str, Tuple[Any, float]]" = OrderedDict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _is_fresh(self, inserted_at: float, now: float) -> bool:
        return now - inserted_at < self.ttl_seconds

    def get(self, key: str, default: Optional[Any] = None) -> Optional[Any]:
        """Return the cached value, or ``default`` on a miss or an expired entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default

            value, inserted_at = entry
            if not self._is_fresh(inserted_at, self._clock()):
                del self._entries[key]
                logger.debug("Cache entry expired", key=key)
                return default

            self._entries.move_to_end(key)
            return value

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite a value, evicting old entries to stay in bounds."""
        with self._lock:
            now = self._clock()
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_entries:
                self._purge_expired(now)
                while len(self._entries) >= self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Cache entry evicted", key=evicted)

            self._entries[key] = (value, now)

    def _purge_expired(self, now: float) -> None:
        stale = [k for k, (_, ts) in self._entries.items() if not self._is_fresh(ts, now)]
        for key in stale:
            del self._entries[key]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
