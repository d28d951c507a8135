from app.services.yearly.stats import YearlyStatsService

__all__ = ["YearlyStatsService"]
