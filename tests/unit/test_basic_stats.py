"""Tests for basic stats service."""

from datetime import date

from app.models.stats import BasicStats
from app.repositories import InMemoryLogRepository
from app.services import BasicStatsService
from tests.conftest import make_log


def _service(source, cache, today=date(2025, 6, 1)):
    return BasicStatsService(source, cache, today=lambda: today)


class TestBasicStats:
    def test_empty_collection(self, source, cache):
        stats = _service(source, cache).get_basic_stats()
        assert stats == BasicStats()
        assert stats.to_dict() == {
            "visited_countries": 0,
            "visited_cities": 0,
            "total_travel_days": 0,
            "average_rating": 0,
            "has_data": False,
            "total_logs": 0,
        }

    def test_totals(self, cache):
        source = InMemoryLogRepository(
            [
                make_log(1, "JP", "2024-01-01", "2024-01-03", city="Tokyo", rating=5),
                make_log(2, "JP", "2024-02-01", "2024-02-02", city="Osaka", rating="3"),
                make_log(3, "US", "2024-03-01", city="Tokyo", rating=4),
            ]
        )
        stats = _service(source, cache).get_basic_stats()

        assert stats.has_data
        assert stats.visited_countries == 2
        assert stats.visited_cities == 2
        assert stats.total_travel_days == 6
        assert stats.average_rating == 4.0
        assert stats.total_logs == 3

    def test_malformed_fields_skipped(self, cache):
        source = InMemoryLogRepository(
            [
                make_log(1, "JP", "2024-01-01", "2024-01-02", rating=4),
                make_log(2, "FR", "whenever", "2024-01-02", rating="great"),
                make_log(3, "DE", "2024-01-05", "2024-01-01", rating=9),
            ]
        )
        stats = _service(source, cache).get_basic_stats()

        assert stats.visited_countries == 3
        assert stats.total_travel_days == 2
        assert stats.average_rating == 4.0

    def test_unused_fields_with_wrong_types_still_count(self, cache):
        source = InMemoryLogRepository(
            [
                make_log(1, "JP", "2024-01-01", "2024-01-02", memo=123),
                make_log(2, "US", "2024-02-01", travelStyle=["solo"]),
                make_log(3.5, "FR", "2024-03-01", "2024-03-03", rating=5),
            ]
        )
        stats = _service(source, cache).get_basic_stats()

        assert stats.has_data
        assert stats.total_logs == 3
        assert stats.visited_countries == 3
        assert stats.visited_cities == 3
        assert stats.total_travel_days == 6
        assert stats.average_rating == 5.0


class TestCaching:
    def test_hit_returns_same_object(self, cache):
        source = InMemoryLogRepository([make_log(1)])
        service = _service(source, cache)
        assert service.get_basic_stats() is service.get_basic_stats()

    def test_relevant_change_recomputes_without_invalidation(self, cache):
        source = InMemoryLogRepository([make_log(1, "JP")])
        service = _service(source, cache)
        assert service.get_basic_stats().visited_countries == 1

        source.add(make_log(2, "US"))
        assert service.get_basic_stats().visited_countries == 2

    def test_memo_change_keeps_cache(self, cache):
        source = InMemoryLogRepository([make_log(1, memo="old")])
        service = _service(source, cache)
        first = service.get_basic_stats()

        source.update(1, {"memo": "new"})
        assert service.get_basic_stats() is first

    def test_invalidate_cache_forces_recompute(self, cache):
        source = InMemoryLogRepository([make_log(1)])
        service = _service(source, cache)
        first = service.get_basic_stats()

        service.invalidate_cache()
        second = service.get_basic_stats()
        assert second == first
        assert second is not first

    def test_corrupt_cache_entry_is_a_miss(self, cache):
        source = InMemoryLogRepository([make_log(1)])
        service = _service(source, cache)
        service.get_basic_stats()
        key = cache.keys()[0]
        entry_fp = cache._entries[key].fingerprint
        cache.set(key, "garbage", entry_fp)

        assert isinstance(service.get_basic_stats(), BasicStats)


class TestYears:
    def test_available_years_include_current(self, cache):
        source = InMemoryLogRepository(
            [make_log(1, start="2022-05-01"), make_log(2, start="2024-01-01"), make_log(3, start="2022-07-01")]
        )
        years = _service(source, cache).get_available_years()
        assert years == (2025, 2024, 2022)

    def test_available_years_empty(self, source, cache):
        assert _service(source, cache).get_available_years() == (2025,)

    def test_current_year_not_duplicated(self, cache):
        source = InMemoryLogRepository([make_log(1, start="2025-01-01")])
        assert _service(source, cache).get_available_years() == (2025,)

    def test_travel_data_by_year(self, cache):
        source = InMemoryLogRepository(
            [make_log(1, start="2023-12-30", end="2024-01-02"), make_log(2, start="2024-05-01")]
        )
        data = _service(source, cache).get_travel_data_by_year("2024")

        assert data.year == 2024
        assert data.has_data
        assert [log.id for log in data.logs] == [2]

    def test_travel_data_tracks_memo(self, cache):
        source = InMemoryLogRepository([make_log(1, start="2024-05-01", memo="old")])
        service = _service(source, cache)
        assert service.get_travel_data_by_year(2024).logs[0].memo == "old"

        source.update(1, {"memo": "new"})
        assert service.get_travel_data_by_year(2024).logs[0].memo == "new"

    def test_travel_data_invalid_year(self, source, cache):
        assert not _service(source, cache).get_travel_data_by_year("soon").has_data
