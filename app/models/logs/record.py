"""Travel log record schema - inbound data from the log store."""

from collections.abc import Iterable
from datetime import date
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from helpers import dates, formulas
from settings import MAX_RATING, MIN_RATING


class LogRecord(BaseModel):
    """One trip entry. Every field is optional so partial records still load."""

    id: Any = None
    country: str | None = None
    city: str | None = None
    start_date: Any = Field(alias="startDate", default=None)
    end_date: Any = Field(alias="endDate", default=None)
    purpose: str | None = None
    rating: Any = None
    travel_style: Any = Field(alias="travelStyle", default=None)
    memo: Any = None

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("country", "city", "purpose", mode="before")
    @classmethod
    def _lenient_text(cls, value: Any) -> str | None:
        """Numbers become text; any other non-string is treated as missing."""
        if value is None or isinstance(value, str):
            return value
        if formulas.is_number(value):
            return str(value)
        return None

    @property
    def start(self) -> date | None:
        return dates.parse_date(self.start_date)

    @property
    def end(self) -> date | None:
        return dates.parse_date(self.end_date)

    @property
    def year(self) -> int | None:
        return self.start.year if self.start else None

    @property
    def stay_days(self) -> int:
        """Inclusive trip length in days, 0 when dates are unusable."""
        return dates.days_between(self.start, self.end)

    @property
    def rating_value(self) -> float | None:
        """Numeric rating within range, else None.

        0 means "not rated" and is treated as absent.
        """
        value = self.rating
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return None
        if not formulas.is_number(value):
            return None
        value = float(value)
        if value <= MIN_RATING or value > MAX_RATING:
            return None
        return value

    @property
    def country_key(self) -> str | None:
        return self.country.strip() if self.country and self.country.strip() else None

    @property
    def city_key(self) -> str | None:
        return self.city.strip() if self.city and self.city.strip() else None


def coerce_logs(items: Iterable[Any] | None) -> list[LogRecord]:
    """Convert raw items into LogRecords.

    Only items that are not records at all are skipped. Wrongly typed fields load
    leniently and are skipped later by the statistic that needs them.
    """
    records = []
    for item in items or []:
        if isinstance(item, LogRecord):
            records.append(item)
            continue
        try:
            records.append(LogRecord.model_validate(item))
        except ValidationError as e:
            logger.warning("Skipping unparseable log record: {}", e.error_count())
    return records
