"""In-memory TTL cache backing the shipped memoizer.

Thread-safe, with optional expiry and LRU eviction. Eviction of an entry is
the only way a per-key throttle instance is ever dropped, so the cache
exposes enough (``delete``, ``clear``, ``stats``) for callers to manage it.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Generic, Hashable, TypeVar

from keyed_throttle.core.logging import hash_key

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass
class CacheItem(Generic[V]):
    """Container for cached values with expiration metadata."""

    value: V
    expires_at: float | None


class SimpleTTLCache(Generic[V]):
    """Thread-safe, in-memory TTL cache with LRU eviction.

    Attributes:
        ttl_seconds: Time-to-live applied to all entries (None never expires).
        max_entries: Maximum number of cached items (None for unlimited).
    """

    def __init__(
        self,
        ttl_seconds: float | None = None,
        max_entries: int | None = None,
    ) -> None:
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be >= 1")

        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._store: OrderedDict[Hashable, CacheItem[V]] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __repr__(self) -> str:  # pragma: no cover - representation only
        return (
            f"SimpleTTLCache(ttl_seconds={self._ttl}, max_entries={self._max_entries}, "
            f"size={len(self._store)}, hits={self._hits}, misses={self._misses}, "
            f"evictions={self._evictions})"
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            item = self._store.get(key)
            return item is not None and not self._is_expired(item)

    def get(self, key: Hashable) -> V | None:
        """Retrieve a cached value if it exists and is not expired.

        Args:
            key: Cache key.

        Returns:
            Cached value or None if not found/expired.
        """

        with self._lock:
            item = self._lookup_locked(key)
            return item.value if item is not None else None

    def set(self, key: Hashable, value: V) -> None:
        """Store a value with TTL, evicting as needed.

        Args:
            key: Cache key.
            value: Value to store.
        """

        with self._lock:
            self._evict_expired_locked()
            expires_at = time.time() + self._ttl if self._ttl is not None else None
            self._store[key] = CacheItem(value=value, expires_at=expires_at)
            self._store.move_to_end(key)
            self._evict_if_over_capacity_locked()

            logger.debug(
                "cache.set",
                extra={
                    "key_hash": hash_key(key),
                    "size": len(self._store),
                    "ttl_s": self._ttl,
                },
            )

    def get_or_set(self, key: Hashable, factory: Callable[[], V]) -> V:
        """Return the cached value for ``key``, computing it on a miss.

        The lookup and the store happen under one lock, so concurrent callers
        with the same key observe a single stored value.

        Args:
            key: Cache key.
            factory: Zero-argument callable producing the value on a miss.

        Returns:
            The cached or freshly computed value.
        """

        with self._lock:
            item = self._lookup_locked(key)
            if item is not None:
                return item.value
            value = factory()
            self.set(key, value)
            return value

    def delete(self, key: Hashable) -> bool:
        """Drop a single entry. Returns True if it was present."""

        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        """Remove all cached entries and reset counters."""

        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> dict[str, int | float | None]:
        """Return lightweight cache metrics without exposing values."""

        with self._lock:
            return {
                "ttl_seconds": self._ttl,
                "max_entries": self._max_entries,
                "entries": len(self._store),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def _lookup_locked(self, key: Hashable) -> CacheItem[V] | None:
        item = self._store.get(key)
        if item is None:
            self._misses += 1
            logger.debug(
                "cache.miss",
                extra={"key_hash": hash_key(key), "reason": "not_found"},
            )
            return None

        if self._is_expired(item):
            self._evict_single(key)
            self._misses += 1
            logger.debug(
                "cache.miss",
                extra={"key_hash": hash_key(key), "reason": "expired"},
            )
            return None

        self._hits += 1
        self._store.move_to_end(key)  # mark as recently used
        logger.debug("cache.hit", extra={"key_hash": hash_key(key)})
        return item

    def _evict_single(self, key: Hashable) -> None:
        if key in self._store:
            self._store.pop(key, None)
            self._evictions += 1

    def _evict_expired_locked(self) -> None:
        if self._ttl is None:
            return
        now = time.time()
        expired_keys = [
            k for k, item in self._store.items()
            if item.expires_at is not None and item.expires_at <= now
        ]
        for key in expired_keys:
            self._evict_single(key)

    def _evict_if_over_capacity_locked(self) -> None:
        if self._max_entries is None:
            return

        while len(self._store) > self._max_entries:
            # popitem(last=False) removes the least recently used entry
            self._store.popitem(last=False)
            self._evictions += 1

    def _is_expired(self, item: CacheItem[V]) -> bool:
        return item.expires_at is not None and time.time() > item.expires_at
