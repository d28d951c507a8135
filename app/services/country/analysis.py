"""Country analysis service."""

import unicodedata
from collections.abc import Mapping
from datetime import date

from loguru import logger

from app.models.common import CacheKey, CacheNamespace
from app.models.logs import LogRecord
from app.models.stats import CountryAnalysis, CountryDetail, CountryStat
from app.repositories.common import CacheRepository
from app.repositories.logs import LogSource
from app.services.aggregates import trip_totals, usable_rating
from app.services.base import CachedAnalyticsService
from helpers import formulas
from settings import CACHE_TTL, DEFAULT_PRECISION, TOP_COUNTRY_LIMIT

NO_RECORDS = "No travel records yet"


def _name_key(name: str) -> str:
    """Accent-insensitive, case-insensitive collation key."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


class CountryAnalysisService(CachedAnalyticsService):
    """Most visited countries with a deterministic five-level ranking."""

    NAMESPACES = (CacheNamespace.COUNTRY_ANALYSIS, CacheNamespace.COUNTRY_DETAIL)

    def __init__(
        self,
        log_source: LogSource,
        cache: CacheRepository,
        ttl: float = CACHE_TTL,
        country_names: Mapping[str, str] | None = None,
    ):
        super().__init__(log_source, cache, ttl)
        self._country_names = dict(country_names or {})

    def get_country_display_name(self, country_code: str) -> str:
        return self._country_names.get(country_code, country_code)

    def get_country_analysis(self) -> CountryAnalysis:
        """Per-country aggregates, ranked, with a top-3 summary."""

        def compute(logs: list[LogRecord]) -> CountryAnalysis:
            if not logs:
                return CountryAnalysis(summary=NO_RECORDS)

            ranked = self.rank_countries(self._country_stats(logs))
            top = ranked[:TOP_COUNTRY_LIMIT]
            return CountryAnalysis(
                has_data=True,
                total_logs=len(logs),
                country_stats=ranked,
                top_country=ranked[0] if ranked else None,
                top_countries=top,
                summary=self._summary(top),
            )

        return self._get_cached_or_compute(CacheKey.of(CacheNamespace.COUNTRY_ANALYSIS), compute, CountryAnalysis)

    def get_country_detail(self, country_code: str) -> CountryDetail:
        """Trips, cities, days and rating for one country."""
        name = self.get_country_display_name(country_code)

        def compute(logs: list[LogRecord]) -> CountryDetail:
            country_logs = [log for log in logs if log.country_key == country_code]
            if not country_logs:
                return CountryDetail(country=country_code, country_name=name)

            totals = trip_totals(country_logs)
            visits = [log.start for log in country_logs if log.start and log.end]
            return CountryDetail(
                country=country_code,
                country_name=name,
                total_trips=totals.trips,
                unique_cities=len(totals.cities),
                total_travel_days=totals.travel_days,
                average_travel_days=totals.average_travel_days,
                average_rating=totals.average_rating,
                last_visit_date=max(visits) if visits else None,
                has_data=True,
            )

        return self._get_cached_or_compute(
            CacheKey.of(CacheNamespace.COUNTRY_DETAIL, country_code), compute, CountryDetail
        )

    def _country_stats(self, logs: list[LogRecord]) -> list[CountryStat]:
        """Aggregate visits per country. Logs without a usable date range are skipped."""
        grouped: dict[str, dict] = {}

        for log in logs:
            country = log.country_key
            if not country:
                continue
            if log.start is None or log.end is None:
                logger.debug("Skipping log {} for country stats: unusable dates", log.id)
                continue

            stats = grouped.setdefault(country, {"visits": 0, "days": 0, "ratings": [], "last": None})
            stats["visits"] += 1
            stats["days"] += log.stay_days
            rating = usable_rating(log)
            if rating is not None:
                stats["ratings"].append(rating)
            if stats["last"] is None or log.start > stats["last"]:
                stats["last"] = log.start

        return [
            CountryStat(
                country=country,
                country_name=self.get_country_display_name(country),
                visit_count=s["visits"],
                total_stay_days=s["days"],
                ratings=tuple(s["ratings"]),
                average_rating=formulas.average(s["ratings"], DEFAULT_PRECISION),
                last_visit_date=s["last"],
            )
            for country, s in grouped.items()
        ]

    @staticmethod
    def rank_countries(stats: list[CountryStat]) -> tuple[CountryStat, ...]:
        """Order by visits, stay days, rating, latest visit (all desc), then name asc."""

        def key(s: CountryStat) -> tuple:
            last: date | None = s.last_visit_date
            recency = (0, -last.toordinal()) if last else (1, 0)
            return (
                -s.visit_count,
                -s.total_stay_days,
                -s.average_rating,
                recency,
                _name_key(s.country_name),
                s.country,
            )

        return tuple(sorted(stats, key=key))

    @staticmethod
    def _summary(top: tuple[CountryStat, ...]) -> str:
        if not top:
            return NO_RECORDS

        lines = []
        for rank, s in enumerate(top, start=1):
            rating = f"{s.average_rating:.1f}" if s.average_rating > 0 else "N/A"
            visits = "visit" if s.visit_count == 1 else "visits"
            days = "day" if s.total_stay_days == 1 else "days"
            lines.append(
                f"{rank}. {s.country_name} ({s.visit_count} {visits}, {s.total_stay_days} {days}, rating {rating})"
            )
        return "\n".join(lines)
