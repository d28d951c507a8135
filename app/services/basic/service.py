"""Basic stats service."""

from collections.abc import Callable
from datetime import date

from loguru import logger

from app.models.common import CacheKey, CacheNamespace
from app.models.logs import LogRecord
from app.models.stats import BasicStats, TravelDataByYear
from app.repositories.common import CacheRepository
from app.repositories.logs import LogSource
from app.services.aggregates import logs_for_year, trip_totals
from app.services.base import ALL_FIELDS, CachedAnalyticsService
from settings import CACHE_TTL


class BasicStatsService(CachedAnalyticsService):
    """Overall travel totals and the list of years with trips."""

    NAMESPACES = (
        CacheNamespace.BASIC_STATS,
        CacheNamespace.TRAVEL_DATA,
        CacheNamespace.AVAILABLE_YEARS,
    )

    def __init__(
        self,
        log_source: LogSource,
        cache: CacheRepository,
        ttl: float = CACHE_TTL,
        today: Callable[[], date] = date.today,
    ):
        super().__init__(log_source, cache, ttl)
        self._today = today

    def get_basic_stats(self) -> BasicStats:
        """Visited countries and cities, total travel days, average rating."""

        def compute(logs: list[LogRecord]) -> BasicStats:
            if not logs:
                return BasicStats()

            totals = trip_totals(logs)
            return BasicStats(
                visited_countries=len(totals.countries),
                visited_cities=len(totals.cities),
                total_travel_days=totals.travel_days,
                average_rating=totals.average_rating,
                has_data=True,
                total_logs=len(logs),
            )

        return self._get_cached_or_compute(CacheKey.of(CacheNamespace.BASIC_STATS), compute, BasicStats)

    def get_travel_data_by_year(self, year: int | str) -> TravelDataByYear:
        """Logs whose trip starts in the given year."""
        try:
            year = int(year)
        except (TypeError, ValueError):
            logger.debug("Invalid year {!r}", year)
            return TravelDataByYear(year=0)

        def compute(logs: list[LogRecord]) -> TravelDataByYear:
            year_logs = tuple(logs_for_year(logs, year))
            return TravelDataByYear(
                year=year,
                logs=year_logs,
                total_logs=len(year_logs),
                has_data=bool(year_logs),
            )

        # Full records are returned, so any field change matters.
        return self._get_cached_or_compute(
            CacheKey.of(CacheNamespace.TRAVEL_DATA, year), compute, TravelDataByYear, fields=ALL_FIELDS
        )

    def get_available_years(self) -> tuple[int, ...]:
        """Years with trips plus the current year, newest first."""
        current_year = self._today().year

        def compute(logs: list[LogRecord]) -> tuple[int, ...]:
            years = {log.year for log in logs if log.year is not None}
            years.add(current_year)
            return tuple(sorted(years, reverse=True))

        return self._get_cached_or_compute(
            CacheKey.of(CacheNamespace.AVAILABLE_YEARS, current_year), compute, tuple
        )
