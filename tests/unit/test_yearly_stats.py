"""Tests for yearly stats service."""

from app.models.stats import ChangeKind
from app.repositories import InMemoryLogRepository
from app.services import YearlyStatsService
from tests.conftest import make_log

LOGS = [
    make_log(1, "JP", "2023-03-01", "2023-03-02", rating=4),
    make_log(2, "US", "2023-07-01", rating=2),
    make_log(3, "JP", "2024-01-01", "2024-01-03", rating=5),
    make_log(4, "FR", "2024-05-01", rating=4),
    make_log(5, "FR", "2024-09-01", "2024-09-02"),
    make_log(6, "IT", "2022-06-01"),
]


class TestFirstYear:
    def test_no_previous_trips(self, cache):
        source = InMemoryLogRepository([make_log(1, start="2024-01-01")])
        result = YearlyStatsService(source, cache).get_yearly_analysis(2024)

        assert result.has_data
        assert result.is_first_year
        assert result.previous_stats.total_trips == 0
        assert {c.kind for c in result.changes.values()} == {ChangeKind.FIRST}
        assert len(result.changes) == 6

    def test_empty_year(self, source, cache):
        result = YearlyStatsService(source, cache).get_yearly_analysis("2030")
        assert not result.has_data
        assert result.year == 2030
        assert result.current_stats.total_trips == 0


class TestYearOverYear:
    def test_stats(self, cache):
        result = YearlyStatsService(InMemoryLogRepository(LOGS), cache).get_yearly_analysis(2024)

        assert not result.is_first_year
        assert result.current_stats.total_trips == 3
        assert result.current_stats.unique_countries == 2
        assert result.current_stats.total_travel_days == 6
        assert result.current_stats.average_travel_days == 2.0
        assert result.current_stats.average_rating == 4.5
        assert result.previous_stats.total_trips == 2
        assert result.previous_stats.average_rating == 3.0

    def test_changes(self, cache):
        changes = YearlyStatsService(InMemoryLogRepository(LOGS), cache).get_yearly_analysis(2024).changes

        assert changes["total_trips"].kind == ChangeKind.INCREASE
        assert changes["total_trips"].percent == 50
        assert changes["total_trips"].display == "+1"
        assert changes["unique_countries"].kind == ChangeKind.NEUTRAL
        assert changes["unique_countries"].display == "0"
        assert changes["total_travel_days"].percent == 100
        assert changes["average_travel_days"].percent == 33
        assert changes["average_rating"].display == "+1.5"

    def test_decrease(self, cache):
        changes = YearlyStatsService(InMemoryLogRepository(LOGS), cache).get_yearly_analysis(2023).changes
        assert changes["total_trips"].kind == ChangeKind.INCREASE
        assert changes["unique_countries"].display == "+1"

        changes = YearlyStatsService(InMemoryLogRepository(LOGS[:3]), cache).get_yearly_analysis(2024).changes
        assert changes["total_trips"].kind == ChangeKind.DECREASE
        assert changes["total_trips"].display == "-1"
        assert changes["total_trips"].percent == -50

    def test_zero_baseline_metric_marked_first(self, cache):
        logs = [make_log(1, start="2023-01-01"), make_log(2, start="2024-01-01", rating=5)]
        changes = YearlyStatsService(InMemoryLogRepository(logs), cache).get_yearly_analysis(2024).changes
        assert changes["average_rating"].kind == ChangeKind.FIRST
        assert changes["total_trips"].kind == ChangeKind.NEUTRAL


class TestMultiYear:
    def test_sorted_unique_years(self, cache):
        result = YearlyStatsService(InMemoryLogRepository(LOGS), cache).get_multi_year_comparison(
            [2024, "2022", 2023, 2023, "bad"]
        )
        assert result.years == (2022, 2023, 2024)
        assert [result.yearly_stats[y].total_trips for y in result.years] == [1, 2, 3]
        assert result.has_data

    def test_trends(self, cache):
        result = YearlyStatsService(InMemoryLogRepository(LOGS), cache).get_multi_year_comparison([2022, 2023, 2024])
        trips = result.trends["total_trips"]
        assert trips.direction == "increasing"
        assert trips.band == "sharp"
        assert trips.slope == 1.0
        assert trips.description == "sharp increase"
        assert set(result.trends) == {"total_trips", "unique_countries", "total_travel_days", "average_rating"}

    def test_single_year_insufficient(self, cache):
        result = YearlyStatsService(InMemoryLogRepository(LOGS), cache).get_multi_year_comparison([2024])
        assert result.trends["total_trips"].direction == "insufficient_data"

    def test_no_data(self, source, cache):
        result = YearlyStatsService(source, cache).get_multi_year_comparison([2020, 2021])
        assert not result.has_data


class TestCaching:
    def test_cached_per_year(self, cache):
        service = YearlyStatsService(InMemoryLogRepository(LOGS), cache)
        first = service.get_yearly_analysis(2024)
        assert service.get_yearly_analysis("2024") is first
        assert service.get_yearly_analysis(2023) is not first

    def test_mutation_detected(self, cache):
        source = InMemoryLogRepository(LOGS)
        service = YearlyStatsService(source, cache)
        assert service.get_yearly_analysis(2024).current_stats.total_trips == 3

        source.delete(5)
        assert service.get_yearly_analysis(2024).current_stats.total_trips == 2
