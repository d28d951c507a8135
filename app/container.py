"""Dependency Injection container - one analytics pipeline per instance."""

from collections.abc import Iterable, Mapping

from loguru import logger

from app.repositories.common import CacheRepository
from app.repositories.logs import LogSource
from app.services.basic import BasicStatsService
from app.services.country import CountryAnalysisService
from app.services.purpose import PurposeAnalysisService
from app.services.yearly import YearlyStatsService
from settings import CACHE_TTL


class AnalyticsContainer:
    """Wires the four analysis services to one log source and one shared cache.

    There is no global instance; each container owns its cache unless one is
    passed in.
    """

    def __init__(
        self,
        log_source: LogSource,
        cache: CacheRepository | None = None,
        ttl: float = CACHE_TTL,
        country_names: Mapping[str, str] | None = None,
    ):
        self.log_source = log_source
        self.cache = cache if cache is not None else CacheRepository()

        # Services (with injected source and cache)
        self.basic_stats = BasicStatsService(log_source, self.cache, ttl)
        self.country_analysis = CountryAnalysisService(log_source, self.cache, ttl, country_names=country_names)
        self.purpose_analysis = PurposeAnalysisService(log_source, self.cache, ttl)
        self.yearly_stats = YearlyStatsService(log_source, self.cache, ttl)
        logger.debug("AnalyticsContainer initialized")

    @property
    def services(self) -> tuple:
        return (self.basic_stats, self.country_analysis, self.purpose_analysis, self.yearly_stats)

    def invalidate_all(self) -> None:
        """Call after any log add/edit/delete."""
        for service in self.services:
            service.invalidate_cache()

    def precompute(self, years: Iterable[int] = ()) -> None:
        """Warm the cache for every service."""
        logger.info("Precomputing travel analytics...")
        self.basic_stats.get_basic_stats()
        available = self.basic_stats.get_available_years()
        self.country_analysis.get_country_analysis()
        self.purpose_analysis.get_purpose_analysis()

        targets = tuple(years) or available
        for year in targets:
            self.yearly_stats.get_yearly_analysis(year)
        self.yearly_stats.get_multi_year_comparison(targets)
        logger.info("Travel analytics cached for {} years", len(targets))
