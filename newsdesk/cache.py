"""
Process-wide read-through cache.

Holds small aggregates (tag cloud, category menu) that every page needs but that
change rarely. A value is computed on the first request for its key and served
from memory until it expires or is invalidated.

Concurrent misses for the same key are not serialized: both callers compute and
the last one stores. The computations cached here are idempotent reads, so this
is harmless.
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger("newsdesk.cache")

TAG_CLOUD_KEY = "tag_cloud"
CATEGORY_MENU_KEY = "category_menu"


class ReadThroughCache:
    """Keyed cache with optional per-entry TTL and explicit eviction."""

    def __init__(self, ttl_seconds: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = threading.Lock()

    def get_or_compute(self, key: str, compute: Callable[[], Any], ttl_seconds: Optional[float] = None) -> Any:
        """
        Return the cached value for ``key``, calling ``compute`` only on a miss.

        ``ttl_seconds`` overrides the cache-wide default for this entry; ``None``
        on both means the entry lives until invalidated. If ``compute`` raises,
        nothing is stored and the exception reaches the caller.
        """
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                value, expires_at = entry
                if expires_at is None or now < expires_at:
                    logger.debug("Cache hit for %s", key)
                    return value
                del self._entries[key]
                logger.debug("Cache entry %s expired", key)

        logger.debug("Cache miss for %s, computing", key)
        value = compute()

        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        expires_at = self._clock() + ttl if ttl is not None else None
        with self._lock:
            self._entries[key] = (value, expires_at)
        return value

    def invalidate(self, key: Optional[str] = None) -> None:
        """Evict ``key``, or every entry when no key is given."""
        with self._lock:
            if key is None:
                self._entries.clear()
                logger.info("Cache cleared")
            elif self._entries.pop(key, None) is not None:
                logger.info("Cache entry %s invalidated", key)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return False
        expires_at = entry[1]
        return expires_at is None or self._clock() < expires_at

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
