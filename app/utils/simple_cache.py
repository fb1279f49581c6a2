"""In-memory TTL cache for normalized search results.

Entries expire a fixed number of seconds after insertion. Expiry is checked
lazily: a stale entry is deleted only when it is next looked up, and there
is no size bound, so keys that are never queried again stay in memory until
the process exits.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheItem:
    """Cached value and the UNIX time it was stored."""

    value: Any
    timestamp: float


class SimpleTTLCache:
    """Thread-safe, in-memory TTL cache.

    Attributes:
        ttl_seconds: Maximum age of an entry that ``get`` still returns.
    """

    def __init__(self, ttl_seconds: float = 60) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self.ttl_seconds = ttl_seconds
        self._store: dict[str, CacheItem] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"SimpleTTLCache(ttl_seconds={self.ttl_seconds}, size={len(self._store)}, "
            f"hits={self._hits}, misses={self._misses}, evictions={self._evictions})"
        )

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def get(self, key: str) -> Any | None:
        """Return the value stored under ``key`` unless it is older than the TTL.

        A stale entry is deleted before returning ``None``.
        """

        with self._lock:
            item = self._store.get(key)
            if item is None:
                self._misses += 1
                logger.debug("cache.miss", extra={"cache_key": key, "reason": "not_found"})
                return None

            if time.time() - item.timestamp > self.ttl_seconds:
                del self._store[key]
                self._evictions += 1
                self._misses += 1
                logger.debug("cache.miss", extra={"cache_key": key, "reason": "expired"})
                return None

            self._hits += 1
            logger.debug("cache.hit", extra={"cache_key": key})
            return item.value

    def set(self, key: str, value: Any) -> None:
        """Insert or overwrite ``key`` stamped with the current time."""

        with self._lock:
            self._store[key] = CacheItem(value=value, timestamp=time.time())
            logger.debug(
                "cache.set",
                extra={"cache_key": key, "size": len(self._store), "ttl_s": self.ttl_seconds},
            )

    def clear(self) -> None:
        """Remove all cached entries and reset counters."""

        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> dict[str, int | float]:
        """Return lightweight cache metrics without exposing values."""

        with self._lock:
            return {
                "ttl_seconds": self.ttl_seconds,
                "entries": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }


def build_cache_key(namespace: str, query: str) -> str:
    """Build a cache key from a provider namespace and the raw query text.

    Example:
        >>> build_cache_key("ddg", "python")
        'ddg:python'
    """

    return f"{namespace}:{query}"
