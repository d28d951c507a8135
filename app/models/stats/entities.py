"""Statistics entities - computed analytics results.

Every result is rebuilt from scratch on recomputation; ordered sequences are
tuples. Callers check `has_data` before reading numeric fields.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum

from app.models.common import BaseEntity
from app.models.logs import LogRecord


class ChangeKind(StrEnum):
    FIRST = "first"
    INCREASE = "increase"
    DECREASE = "decrease"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class BasicStats(BaseEntity):
    """Overall travel totals."""

    visited_countries: int = 0
    visited_cities: int = 0
    total_travel_days: int = 0
    average_rating: float = 0
    has_data: bool = False
    total_logs: int = 0


@dataclass(frozen=True)
class TravelDataByYear(BaseEntity):
    """Logs whose trip starts in a given year."""

    year: int
    logs: tuple[LogRecord, ...] = ()
    total_logs: int = 0
    has_data: bool = False


@dataclass(frozen=True)
class CountryStat(BaseEntity):
    """Aggregates for one country."""

    country: str
    country_name: str
    visit_count: int
    total_stay_days: int
    ratings: tuple[float, ...]
    average_rating: float
    last_visit_date: date | None


@dataclass(frozen=True)
class CountryAnalysis(BaseEntity):
    """Country ranking."""

    has_data: bool = False
    total_logs: int = 0
    country_stats: tuple[CountryStat, ...] = ()
    top_country: CountryStat | None = None
    top_countries: tuple[CountryStat, ...] = ()
    summary: str = ""


@dataclass(frozen=True)
class CountryDetail(BaseEntity):
    """Detailed statistics for one country."""

    country: str
    country_name: str
    total_trips: int = 0
    unique_cities: int = 0
    total_travel_days: int = 0
    average_travel_days: float = 0
    average_rating: float = 0
    last_visit_date: date | None = None
    has_data: bool = False


@dataclass(frozen=True)
class PurposeItem(BaseEntity):
    """Share of one travel purpose."""

    purpose: str
    purpose_name: str
    count: int
    percentage: int


@dataclass(frozen=True)
class PurposeAnalysis(BaseEntity):
    """Travel purpose breakdown."""

    has_data: bool = False
    total_logs: int = 0
    purpose_breakdown: tuple[PurposeItem, ...] = ()
    top_purposes: tuple[PurposeItem, ...] = ()
    summary: str = ""
    total_purposes: int = 0


@dataclass(frozen=True)
class PurposeDetail(BaseEntity):
    """Detailed statistics for one travel purpose."""

    purpose: str
    purpose_name: str
    total_trips: int = 0
    unique_countries: int = 0
    unique_cities: int = 0
    total_travel_days: int = 0
    average_travel_days: float = 0
    average_rating: float = 0
    has_data: bool = False


@dataclass(frozen=True)
class YearlyStats(BaseEntity):
    """Per-year aggregates."""

    total_trips: int = 0
    unique_countries: int = 0
    unique_cities: int = 0
    total_travel_days: int = 0
    average_travel_days: float = 0
    average_rating: float = 0


@dataclass(frozen=True)
class MetricChange(BaseEntity):
    """Year-over-year change of one metric."""

    kind: ChangeKind
    value: float = 0
    percent: float = 0
    display: str = ""


@dataclass(frozen=True)
class YearlyAnalysis(BaseEntity):
    """Target year compared with the year before."""

    year: int
    has_data: bool = False
    current_stats: YearlyStats = field(default_factory=YearlyStats)
    previous_stats: YearlyStats = field(default_factory=YearlyStats)
    changes: dict[str, MetricChange] = field(default_factory=dict)
    is_first_year: bool = True


@dataclass(frozen=True)
class MetricTrend(BaseEntity):
    """Linear trend of one metric across years."""

    direction: str
    band: str
    strength: float
    slope: float
    description: str = ""


@dataclass(frozen=True)
class MultiYearComparison(BaseEntity):
    """Stats and trends over an ordered list of years."""

    years: tuple[int, ...] = ()
    yearly_stats: dict[int, YearlyStats] = field(default_factory=dict)
    trends: dict[str, MetricTrend] = field(default_factory=dict)
    has_data: bool = False
