"""Yearly stats service."""

from collections.abc import Iterable

from loguru import logger

from app.models.common import CacheKey, CacheNamespace
from app.models.logs import LogRecord
from app.models.stats import (
    ChangeKind,
    MetricChange,
    MetricTrend,
    MultiYearComparison,
    YearlyAnalysis,
    YearlyStats,
)
from app.services.aggregates import logs_for_year, trip_totals
from app.services.base import CachedAnalyticsService
from helpers import formulas
from settings import DEFAULT_PRECISION

CHANGE_METRICS = (
    "total_trips",
    "unique_countries",
    "unique_cities",
    "total_travel_days",
    "average_travel_days",
    "average_rating",
)
AVERAGE_METRICS = {"average_travel_days", "average_rating"}
TREND_METRICS = ("total_trips", "unique_countries", "total_travel_days", "average_rating")

_DIRECTION_KIND = {
    "increase": ChangeKind.INCREASE,
    "decrease": ChangeKind.DECREASE,
    "neutral": ChangeKind.NEUTRAL,
}


def yearly_stats(logs: list[LogRecord]) -> YearlyStats:
    """Aggregates for one year's logs."""
    if not logs:
        return YearlyStats()

    totals = trip_totals(logs)
    return YearlyStats(
        total_trips=totals.trips,
        unique_countries=len(totals.countries),
        unique_cities=len(totals.cities),
        total_travel_days=totals.travel_days,
        average_travel_days=totals.average_travel_days,
        average_rating=totals.average_rating,
    )


def metric_change(metric: str, current: float, previous: float) -> MetricChange:
    """Change of one metric; a zero baseline is reported as a first record."""
    rate = formulas.change_rate(current, previous, precision=0)
    kind = _DIRECTION_KIND.get(rate["direction"])
    if kind is None:
        return MetricChange(kind=ChangeKind.FIRST, display="first record")

    value = rate["value"]
    if metric in AVERAGE_METRICS:
        value = round(value, DEFAULT_PRECISION)
        display = f"{value:+.1f}" if value else "0.0"
    else:
        display = f"{value:+d}" if value else "0"

    return MetricChange(kind=kind, value=value, percent=rate["rate"], display=display)


def first_year_changes() -> dict[str, MetricChange]:
    return {m: MetricChange(kind=ChangeKind.FIRST, display="first record") for m in CHANGE_METRICS}


class YearlyStatsService(CachedAnalyticsService):
    """Year-over-year comparison and multi-year trends."""

    NAMESPACES = (CacheNamespace.YEARLY_STATS, CacheNamespace.MULTI_YEAR)

    def get_yearly_analysis(self, year: int | str) -> YearlyAnalysis:
        """Compare `year` with the year before."""
        try:
            year = int(year)
        except (TypeError, ValueError):
            logger.debug("Invalid year {!r}", year)
            return YearlyAnalysis(year=0, changes=first_year_changes())

        def compute(logs: list[LogRecord]) -> YearlyAnalysis:
            current = yearly_stats(logs_for_year(logs, year))
            previous = yearly_stats(logs_for_year(logs, year - 1))
            is_first_year = previous.total_trips == 0

            if is_first_year:
                changes = first_year_changes()
            else:
                changes = {
                    m: metric_change(m, getattr(current, m), getattr(previous, m)) for m in CHANGE_METRICS
                }

            return YearlyAnalysis(
                year=year,
                has_data=current.total_trips > 0,
                current_stats=current,
                previous_stats=previous,
                changes=changes,
                is_first_year=is_first_year,
            )

        return self._get_cached_or_compute(CacheKey.of(CacheNamespace.YEARLY_STATS, year), compute, YearlyAnalysis)

    def get_multi_year_comparison(self, years: Iterable[int | str]) -> MultiYearComparison:
        """Per-year stats and trend per metric across the given years (ascending)."""
        parsed = set()
        for y in years or []:
            try:
                parsed.add(int(y))
            except (TypeError, ValueError):
                logger.debug("Skipping invalid year {!r}", y)
        ordered = tuple(sorted(parsed))

        def compute(logs: list[LogRecord]) -> MultiYearComparison:
            per_year = {y: yearly_stats(logs_for_year(logs, y)) for y in ordered}
            trends = {}
            for metric in TREND_METRICS:
                trend = formulas.trend_analysis([getattr(per_year[y], metric) for y in ordered])
                trends[metric] = MetricTrend(**trend)

            return MultiYearComparison(
                years=ordered,
                yearly_stats=per_year,
                trends=trends,
                has_data=any(s.total_trips > 0 for s in per_year.values()),
            )

        return self._get_cached_or_compute(
            CacheKey.of(CacheNamespace.MULTI_YEAR, *ordered), compute, MultiYearComparison
        )
