"""In-memory TTL cache used to spare the market data provider.

CoinGecko's public tier is rate limited per IP, and every dashboard poll
would otherwise fan out into upstream calls. Thread-safe, LRU-bounded, and
easy to swap for Redis behind the same get/set interface.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class CacheItem:
    value: Any
    expires_at: float


class SimpleTTLCache:
    """Thread-safe, in-memory TTL cache with LRU eviction.

    Attributes:
        ttl_seconds: Time-to-live applied to all entries.
        max_entries: Maximum number of cached items (None for unlimited).
    """

    def __init__(self, ttl_seconds: float = 30, max_entries: int | None = 256) -> None:
        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._store: OrderedDict[str, CacheItem] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"SimpleTTLCache(ttl_seconds={self._ttl}, max_entries={self._max_entries}, "
            f"size={len(self._store)})"
        )

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None when missing or expired."""

        with self._lock:
            item = self._store.get(key)
            if item is None or time.time() > item.expires_at:
                if item is not None:
                    self._evict_single(key)
                self._misses += 1
                logger.debug("cache.miss", extra={"cache_key": key})
                return None

            self._hits += 1
            self._store.move_to_end(key)
            logger.debug("cache.hit", extra={"cache_key": key})
            return item.value

    def set(self, key: str, value: Any) -> None:
        """Store a value with TTL, evicting expired and overflow entries."""

        with self._lock:
            self._evict_expired_locked()
            self._store[key] = CacheItem(value=value, expires_at=time.time() + self._ttl)
            self._store.move_to_end(key)
            self._evict_if_over_capacity_locked()

    def clear(self) -> None:
        """Remove all cached entries and reset counters."""

        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> dict[str, int | float | None]:
        with self._lock:
            return {
                "ttl_seconds": self._ttl,
                "max_entries": self._max_entries,
                "entries": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def _evict_single(self, key: str) -> None:
        if self._store.pop(key, None) is not None:
            self._evictions += 1

    def _evict_expired_locked(self) -> None:
        now = time.time()
        for key in [k for k, item in self._store.items() if item.expires_at <= now]:
            self._evict_single(key)

    def _evict_if_over_capacity_locked(self) -> None:
        if self._max_entries is None:
            return

        while len(self._store) > self._max_entries:
            self._store.popitem(last=False)
            self._evictions += 1


def build_cache_key(namespace: str, *parts: Any) -> str:
    """Build a readable cache key such as ``markets:usd:bitcoin,ethereum``.

    Args:
        namespace: Operation name.
        *parts: Request parameters; lists/tuples are joined with commas.

    Returns:
        Colon-separated key string.
    """

    rendered = [
        ",".join(str(p) for p in part) if isinstance(part, (list, tuple)) else str(part)
        for part in parts
    ]
    return ":".join([namespace, *rendered])
