"""Shared test helpers."""

import pytest

from app.repositories import CacheRepository, InMemoryLogRepository


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_log(log_id, country="JP", start="2024-01-01", end=None, **extra) -> dict:
    """Raw log dict in the log store's camelCase shape."""
    log = {
        "id": log_id,
        "country": country,
        "city": extra.pop("city", f"{country}-city"),
        "startDate": start,
        "endDate": end or start,
    }
    log.update(extra)
    return log


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> CacheRepository:
    return CacheRepository(max_size=10, default_ttl=60, clock=clock)


@pytest.fixture
def source() -> InMemoryLogRepository:
    return InMemoryLogRepository()
