# snackbar/storage/query_cache.py

"""In-memory search result cache with per-entry absolute expiry."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any

from snackbar.config.settings import Settings

logger = logging.getLogger("snackbar.cache")


@dataclass
class CacheEntry:
    """A cached value and the wall-clock second it stops being valid."""

    key: str
    value: Any
    expires_at: float


class ExpiringCache:
    """Key/value store whose entries expire a fixed TTL after being set.

    Expiry is checked lazily: a ``get`` past ``expires_at`` behaves as a
    miss and drops the entry.  There is no sweeper and no capacity bound.
    Concurrent writers to the same key race harmlessly, last write wins.
    """

    def __init__(self, ttl_ms: int | None = None) -> None:
        if ttl_ms is None:
            ttl_ms = Settings.CACHE_TTL_MS
        self._ttl: float = ttl_ms / 1000
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Return the live value for *key*, or ``None`` on miss."""
        now = time.time()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now > entry.expires_at:
                del self._entries[key]
                logger.debug("Evicted expired cache entry '%s'", key)
                return None
        logger.debug("Cache hit for '%s'", key)
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key* for one TTL from now."""
        entry = CacheEntry(
            key=key,
            value=value,
            expires_at=time.time() + self._ttl,
        )
        with self._lock:
            self._entries[key] = entry
        logger.debug("Cached '%s' for %.0fs", key, self._ttl)

    def clear(self) -> int:
        """Purge all entries and return how many were removed."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.info("Cache manually purged (%d entries removed)", count)
        return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
