"""Models package - log records, cache types and statistics entities."""

from app.models.common import BaseEntity, CacheEntry, CacheKey, CacheNamespace, CacheStats
from app.models.logs import LogRecord, coerce_logs
from app.models.stats import (
    BasicStats,
    ChangeKind,
    CountryAnalysis,
    CountryDetail,
    CountryStat,
    MetricChange,
    MetricTrend,
    MultiYearComparison,
    PurposeAnalysis,
    PurposeDetail,
    PurposeItem,
    TravelDataByYear,
    YearlyAnalysis,
    YearlyStats,
)

__all__ = [
    # Common
    "BaseEntity",
    "CacheEntry",
    "CacheKey",
    "CacheNamespace",
    "CacheStats",
    # Logs
    "LogRecord",
    "coerce_logs",
    # Stats
    "BasicStats",
    "ChangeKind",
    "CountryAnalysis",
    "CountryDetail",
    "CountryStat",
    "MetricChange",
    "MetricTrend",
    "MultiYearComparison",
    "PurposeAnalysis",
    "PurposeDetail",
    "PurposeItem",
    "TravelDataByYear",
    "YearlyAnalysis",
    "YearlyStats",
]
