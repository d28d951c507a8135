"""Trip aggregates shared by the analysis services."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger

from app.models.logs import LogRecord
from helpers import formulas
from settings import DEFAULT_PRECISION


@dataclass
class TripTotals:
    """Running totals over a set of logs."""

    trips: int = 0
    countries: set[str] = field(default_factory=set)
    cities: set[str] = field(default_factory=set)
    travel_days: int = 0
    ratings: list[float] = field(default_factory=list)

    @property
    def average_rating(self) -> float:
        return formulas.average(self.ratings, DEFAULT_PRECISION)

    @property
    def average_travel_days(self) -> float:
        if not self.trips:
            return 0
        return round(self.travel_days / self.trips, DEFAULT_PRECISION)


def usable_days(log: LogRecord) -> int:
    """Inclusive stay length; malformed dates contribute nothing."""
    days = log.stay_days
    if not days and (log.start_date or log.end_date):
        logger.debug("Skipping travel days for log {}: unusable dates", log.id)
    return days


def usable_rating(log: LogRecord) -> float | None:
    rating = log.rating_value
    if rating is None and log.rating not in (None, "", 0):
        logger.debug("Skipping rating for log {}: {!r}", log.id, log.rating)
    return rating


def trip_totals(logs: Iterable[LogRecord]) -> TripTotals:
    """Distinct countries and cities, summed days and valid ratings."""
    totals = TripTotals()
    for log in logs:
        totals.trips += 1
        if log.country_key:
            totals.countries.add(log.country_key)
        if log.city_key:
            totals.cities.add(log.city_key)
        totals.travel_days += usable_days(log)
        rating = usable_rating(log)
        if rating is not None:
            totals.ratings.append(rating)
    return totals


def logs_for_year(logs: Iterable[LogRecord], year: int) -> list[LogRecord]:
    """Logs whose trip starts in `year`."""
    return [log for log in logs if log.year == year]
