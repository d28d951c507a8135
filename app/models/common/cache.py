"""Cache types - structured keys, entries and statistics."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from app.models.common.base import BaseEntity


class CacheNamespace(StrEnum):
    BASIC_STATS = "basic_stats"
    TRAVEL_DATA = "travel_data"
    AVAILABLE_YEARS = "available_years"
    COUNTRY_ANALYSIS = "country_analysis"
    COUNTRY_DETAIL = "country_detail"
    PURPOSE_ANALYSIS = "purpose_analysis"
    PURPOSE_DETAIL = "purpose_detail"
    YEARLY_STATS = "yearly_stats"
    MULTI_YEAR = "multi_year"


@dataclass(frozen=True)
class CacheKey:
    """Namespace plus parameter tuple. Hashable, so usable as a dict key."""

    namespace: CacheNamespace
    params: tuple = ()

    @classmethod
    def of(cls, namespace: CacheNamespace, *params: Any) -> "CacheKey":
        return cls(namespace, tuple(params))

    @staticmethod
    def in_namespace(*namespaces: CacheNamespace) -> Callable[["CacheKey"], bool]:
        """Predicate matching keys in any of the given namespaces."""
        wanted = frozenset(namespaces)
        return lambda key: isinstance(key, CacheKey) and key.namespace in wanted

    def __str__(self) -> str:
        if not self.params:
            return str(self.namespace)
        return f"{self.namespace}:{':'.join(str(p) for p in self.params)}"


@dataclass
class CacheEntry:
    """Stored value with freshness metadata. Mutable: access info is touched on hits."""

    data: Any
    fingerprint: str | None
    created_at: float
    ttl: float
    access_count: int = 0
    last_accessed_at: float = field(default=0.0)

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


@dataclass(frozen=True)
class CacheStats(BaseEntity):
    """Read-only cache snapshot."""

    total_entries: int
    valid_entries: int
    total_access_count: int
    capacity: int
    estimated_memory: int
    hits: int = 0
    misses: int = 0
