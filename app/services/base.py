"""Base class for cached analytics services."""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from loguru import logger

from app.models.common import CacheKey, CacheNamespace
from app.models.logs import LogRecord, coerce_logs
from app.repositories.common import CacheRepository
from app.repositories.logs import LogSource
from helpers.fingerprint import fingerprint
from settings import CACHE_TTL

T = TypeVar("T")

TRIP_FIELDS = ("id", "country", "city", "start_date", "end_date", "rating")
ALL_FIELDS = tuple(LogRecord.model_fields)


class CachedAnalyticsService:
    """Reads logs, fingerprints the fields it uses, and caches results per key.

    Subclasses set FINGERPRINT_FIELDS (what their statistics depend on) and
    NAMESPACES (the cache keys they own).
    """

    FINGERPRINT_FIELDS: tuple[str, ...] = TRIP_FIELDS
    NAMESPACES: tuple[CacheNamespace, ...] = ()

    def __init__(self, log_source: LogSource, cache: CacheRepository, ttl: float = CACHE_TTL):
        self._source = log_source
        self._cache = cache
        self._ttl = ttl
        logger.debug("{} initialized", self.__class__.__name__)

    def _logs(self) -> list[LogRecord]:
        return coerce_logs(self._source.get_all_logs())

    def _fingerprint(self, logs: list[LogRecord], fields: Iterable[str] | None = None) -> str:
        return fingerprint(logs, fields or self.FINGERPRINT_FIELDS)

    def _get_cached_or_compute(
        self,
        key: CacheKey,
        compute_fn: Callable[[list[LogRecord]], T],
        expected: type | None = None,
        fields: Iterable[str] | None = None,
    ) -> T:
        """Return the cached result while the fingerprint matches, else compute and store.

        Cache failures and unexpected cached types count as a miss.
        """
        logs = self._logs()
        digest = self._fingerprint(logs, fields)

        cached = self._read_cache(key, digest)
        if cached is not None:
            if expected is None or isinstance(cached, expected):
                return cached
            logger.warning("Discarding cached {} of unexpected type {}", key, type(cached).__name__)
            self._cache.invalidate(key)

        result = compute_fn(logs)
        logger.info("Computed {} from {} logs", key, len(logs))

        try:
            self._cache.set(key, result, digest, self._ttl)
        except Exception as e:
            logger.warning("Cache write failed for {}: {}", key, e)
        return result

    def _read_cache(self, key: CacheKey, digest: str) -> Any | None:
        try:
            return self._cache.get(key, digest)
        except Exception as e:
            logger.warning("Cache read failed for {}: {}", key, e)
            return None

    def invalidate_cache(self) -> None:
        """Drop every cache entry this service owns."""
        removed = self._cache.invalidate_pattern(CacheKey.in_namespace(*self.NAMESPACES))
        logger.debug("{} cache invalidated ({} entries)", self.__class__.__name__, removed)

    def cleanup(self) -> None:
        self.invalidate_cache()
