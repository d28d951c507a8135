"""Log models - trip records consumed by the analytics services."""

from app.models.logs.record import LogRecord, coerce_logs

__all__ = ["LogRecord", "coerce_logs"]
