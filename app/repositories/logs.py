"""Log repository - the source of trip records for analytics."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from loguru import logger

from app.models.logs import LogRecord


@runtime_checkable
class LogSource(Protocol):
    """Anything that can list every log record. Analytics never writes back."""

    def get_all_logs(self) -> Sequence[LogRecord | Mapping[str, Any]]: ...


class InMemoryLogRepository:
    """List-backed log store. Durable storage lives elsewhere."""

    def __init__(self, logs: Sequence[LogRecord | Mapping[str, Any]] | None = None):
        self._logs: list[LogRecord | Mapping[str, Any]] = list(logs or [])
        logger.debug("{} initialized with {} logs", self.__class__.__name__, len(self._logs))

    def get_all_logs(self) -> list[LogRecord | Mapping[str, Any]]:
        return list(self._logs)

    def add(self, log: LogRecord | Mapping[str, Any]) -> None:
        self._logs.append(log)

    def update(self, log_id: Any, changes: Mapping[str, Any]) -> bool:
        """Apply field changes to the log with this id. False if not found."""
        for i, log in enumerate(self._logs):
            if _log_id(log) != log_id:
                continue
            if isinstance(log, LogRecord):
                self._logs[i] = _apply_changes(log, changes)
            else:
                self._logs[i] = {**log, **changes}
            return True
        return False

    def delete(self, log_id: Any) -> bool:
        before = len(self._logs)
        self._logs = [log for log in self._logs if _log_id(log) != log_id]
        return len(self._logs) < before

    def replace_all(self, logs: Sequence[LogRecord | Mapping[str, Any]]) -> None:
        self._logs = list(logs)
        logger.info("Log store replaced ({} logs)", len(self._logs))


def _apply_changes(log: LogRecord, changes: Mapping[str, Any]) -> LogRecord:
    """Merge changes keyed by field name or alias, then revalidate."""
    data = log.model_dump(by_alias=True)
    for key, value in changes.items():
        field = LogRecord.model_fields.get(key)
        data[field.alias or key if field else key] = value
    return LogRecord.model_validate(data)


def _log_id(log: LogRecord | Mapping[str, Any]) -> Any:
    return log.id if isinstance(log, LogRecord) else log.get("id")
