"""Common models - base classes and cache types."""

from app.models.common.base import BaseEntity
from app.models.common.cache import CacheEntry, CacheKey, CacheNamespace, CacheStats

__all__ = [
    "BaseEntity",
    "CacheEntry",
    "CacheKey",
    "CacheNamespace",
    "CacheStats",
]
