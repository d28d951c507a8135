"""Cache repository - in-memory analytics cache with TTL and LRU eviction."""

import json
import threading
import time
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any

from loguru import logger

from app.models.common import CacheEntry, CacheStats
from settings import CACHE_MAX_SIZE, CACHE_MIN_TTL, CACHE_TTL


class CacheRepository:
    """Bounded key-value store for computed analytics.

    An entry is visible only while it is younger than its TTL and, when the
    caller passes a fingerprint, only if the stored fingerprint matches.
    Invalid entries are dropped lazily on access. Capacity is hard: inserting
    a new key into a full store evicts the least recently accessed entry.
    """

    def __init__(
        self,
        max_size: int = CACHE_MAX_SIZE,
        default_ttl: float = CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be > 0, got {default_ttl}")

        self._max_size = max_size
        self._default_ttl = default_ttl
        self._clock = clock
        # Ordered least -> most recently accessed
        self._entries: OrderedDict[Hashable, CacheEntry] = OrderedDict()
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        logger.debug("CacheRepository initialized (max_size={}, ttl={}s)", max_size, default_ttl)

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return self.has(key)

    def get(self, key: Hashable, fingerprint: str | None = None) -> Any | None:
        """Cached value, or None when missing, expired or fingerprint-mismatched."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            now = self._clock()
            if entry.is_expired(now):
                del self._entries[key]
                self._misses += 1
                logger.debug("Cache expired: {}", key)
                return None

            if fingerprint is not None and entry.fingerprint != fingerprint:
                del self._entries[key]
                self._misses += 1
                logger.debug("Cache stale: {}", key)
                return None

            entry.access_count += 1
            entry.last_accessed_at = now
            self._entries.move_to_end(key)
            self._hits += 1
            logger.debug("Cache hit: {}", key)
            return entry.data

    def set(self, key: Hashable, data: Any, fingerprint: str | None = None, ttl: float | None = None) -> None:
        """Store data under key, evicting the least recently used entry if full."""
        with self._lock:
            now = self._clock()
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self._max_size:
                self._evict_lru()

            self._entries[key] = CacheEntry(
                data=data,
                fingerprint=fingerprint,
                created_at=now,
                ttl=ttl if ttl is not None and ttl > 0 else self._default_ttl,
                last_accessed_at=now,
            )
            logger.debug("Cache saved: {}", key)

    def has(self, key: Hashable) -> bool:
        """True if key holds an unexpired entry. Does not count as an access."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return False
            return True

    def keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._entries.keys())

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def invalidate_pattern(self, matcher: Callable[[Hashable], bool]) -> int:
        """Remove every key the predicate accepts. Returns how many were removed."""
        with self._lock:
            doomed = [k for k in self._entries if matcher(k)]
            for key in doomed:
                del self._entries[key]
            if doomed:
                logger.debug("Cache invalidated {} entries", len(doomed))
            return len(doomed)

    def invalidate_all(self) -> None:
        with self._lock:
            self._entries.clear()
            logger.info("All cache cleared")

    def cleanup_expired(self) -> int:
        """Drop all expired entries. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in expired:
                del self._entries[key]
            if expired:
                logger.debug("Cache cleanup removed {} expired entries", len(expired))
            return len(expired)

    def get_stats(self) -> CacheStats:
        """Snapshot of cache usage. Never mutates the store."""
        with self._lock:
            now = self._clock()
            entries = list(self._entries.items())
            return CacheStats(
                total_entries=len(entries),
                valid_entries=sum(1 for _, e in entries if not e.is_expired(now)),
                total_access_count=sum(e.access_count for _, e in entries),
                capacity=self._max_size,
                estimated_memory=self._estimate_memory(entries),
                hits=self._hits,
                misses=self._misses,
            )

    def update_config(self, max_size: int | None = None, default_ttl: float | None = None) -> None:
        """Change capacity and default TTL; shrinking evicts down to the new capacity."""
        with self._lock:
            if max_size is not None:
                self._max_size = max(1, max_size)
                while len(self._entries) > self._max_size:
                    self._evict_lru()
            if default_ttl is not None:
                self._default_ttl = max(CACHE_MIN_TTL, default_ttl)
            logger.info("Cache config updated (max_size={}, ttl={}s)", self._max_size, self._default_ttl)

    def _evict_lru(self) -> None:
        key, _ = self._entries.popitem(last=False)
        logger.debug("Cache evicted (LRU): {}", key)

    @staticmethod
    def _estimate_memory(entries: list[tuple[Hashable, CacheEntry]]) -> int:
        """Rough size in bytes: two bytes per character of the JSON form."""
        total = 0
        for key, entry in entries:
            try:
                total += len(str(key)) * 2
                total += len(json.dumps(entry.__dict__, default=str)) * 2
            except (TypeError, ValueError) as e:
                logger.debug("Cannot size cache entry {}: {}", key, e)
        return total
