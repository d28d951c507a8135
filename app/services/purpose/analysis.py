"""Travel purpose analysis service."""

from collections import Counter

from app.models.common import CacheKey, CacheNamespace
from app.models.logs import LogRecord
from app.models.stats import PurposeAnalysis, PurposeDetail, PurposeItem
from app.services.aggregates import trip_totals
from app.services.base import CachedAnalyticsService
from helpers import formulas
from settings import TOP_PURPOSE_LIMIT, TOP_PURPOSE_THRESHOLD

PURPOSE_NAMES = {
    "tourism": "Tourism",
    "business": "Business",
    "family": "Visiting family/friends",
    "study": "Study",
    "work": "Work",
    "training": "Training/secondment",
    "event": "Event/conference",
    "volunteer": "Volunteering",
    "medical": "Medical",
    "transit": "Transit",
    "research": "Research",
    "immigration": "Immigration",
    "other": "Other",
}

NO_RECORDS = "No travel records yet"
VARIED = "Travel purposes are varied"


class PurposeAnalysisService(CachedAnalyticsService):
    """Share of trips per purpose code."""

    FINGERPRINT_FIELDS = ("id", "purpose", "start_date", "end_date", "rating")
    NAMESPACES = (CacheNamespace.PURPOSE_ANALYSIS, CacheNamespace.PURPOSE_DETAIL)

    @staticmethod
    def get_purpose_display_name(purpose: str) -> str:
        return PURPOSE_NAMES.get(purpose, PURPOSE_NAMES["other"])

    @staticmethod
    def get_all_purpose_names() -> dict[str, str]:
        return dict(PURPOSE_NAMES)

    def get_purpose_analysis(self) -> PurposeAnalysis:
        """Breakdown by purpose, top purposes above the threshold, one-line summary."""

        def compute(logs: list[LogRecord]) -> PurposeAnalysis:
            if not logs:
                return PurposeAnalysis(summary=NO_RECORDS)

            counts = Counter(log.purpose for log in logs if log.purpose)
            breakdown = tuple(
                PurposeItem(
                    purpose=purpose,
                    purpose_name=self.get_purpose_display_name(purpose),
                    count=count,
                    percentage=formulas.percentage(count, len(logs)),
                )
                for purpose, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
            )
            top = tuple(p for p in breakdown if p.percentage >= TOP_PURPOSE_THRESHOLD)[:TOP_PURPOSE_LIMIT]

            return PurposeAnalysis(
                has_data=True,
                total_logs=len(logs),
                purpose_breakdown=breakdown,
                top_purposes=top,
                summary=self._summary(top),
                total_purposes=len(counts),
            )

        return self._get_cached_or_compute(CacheKey.of(CacheNamespace.PURPOSE_ANALYSIS), compute, PurposeAnalysis)

    def get_purpose_detail(self, purpose: str) -> PurposeDetail:
        """Trips, countries, cities, days and rating for one purpose."""
        name = self.get_purpose_display_name(purpose)

        def compute(logs: list[LogRecord]) -> PurposeDetail:
            purpose_logs = [log for log in logs if log.purpose == purpose]
            if not purpose_logs:
                return PurposeDetail(purpose=purpose, purpose_name=name)

            totals = trip_totals(purpose_logs)
            return PurposeDetail(
                purpose=purpose,
                purpose_name=name,
                total_trips=totals.trips,
                unique_countries=len(totals.countries),
                unique_cities=len(totals.cities),
                total_travel_days=totals.travel_days,
                average_travel_days=totals.average_travel_days,
                average_rating=totals.average_rating,
                has_data=True,
            )

        # Detail reads country and city too.
        fields = self.FINGERPRINT_FIELDS + ("country", "city")
        return self._get_cached_or_compute(
            CacheKey.of(CacheNamespace.PURPOSE_DETAIL, purpose), compute, PurposeDetail, fields=fields
        )

    @staticmethod
    def _summary(top: tuple[PurposeItem, ...]) -> str:
        if not top:
            return VARIED
        return ", ".join(f"{p.purpose_name} {p.percentage}%" for p in top)
