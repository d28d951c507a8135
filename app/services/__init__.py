"""Services package - service class exports."""

from app.services.base import CachedAnalyticsService
from app.services.basic import BasicStatsService
from app.services.country import CountryAnalysisService
from app.services.purpose import PurposeAnalysisService
from app.services.yearly import YearlyStatsService

__all__ = [
    "BasicStatsService",
    "CachedAnalyticsService",
    "CountryAnalysisService",
    "PurposeAnalysisService",
    "YearlyStatsService",
]
