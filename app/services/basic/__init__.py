from app.services.basic.service import BasicStatsService

__all__ = ["BasicStatsService"]
