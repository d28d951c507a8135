"""Repositories package - analytics cache and log sources."""

from app.repositories.common import CacheRepository
from app.repositories.logs import InMemoryLogRepository, LogSource

__all__ = [
    # Common
    "CacheRepository",
    # Logs
    "InMemoryLogRepository",
    "LogSource",
]
