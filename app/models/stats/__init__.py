"""Statistics models - result entities returned by the analysis services."""

from app.models.stats.entities import (
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
