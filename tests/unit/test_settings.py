"""Tests for logging setup."""

from loguru import logger

import settings.logging as log_settings
from app.repositories import CacheRepository


def _record(name, level):
    return {"name": name, "level": logger.level(level)}


class TestLogging:
    def test_console_only(self):
        assert log_settings.setup_logging(level="DEBUG", to_file=False) is logger
        logger.remove()

    def test_file_sink(self, tmp_path, monkeypatch):
        monkeypatch.setattr(log_settings, "LOG_DIR", tmp_path / "logs")
        log_settings.setup_logging(to_file=True)
        logger.info("hello")
        logger.remove()

        # Closed sinks are compressed, so match both forms
        assert list((tmp_path / "logs").glob("travel_analytics_*"))

    def test_cache_events_get_own_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(log_settings, "LOG_DIR", tmp_path / "logs")
        log_settings.setup_logging(to_file=True)
        CacheRepository(max_size=2, default_ttl=10).set("k", 1)
        logger.remove()

        (cache_log,) = (tmp_path / "logs").glob("travel_cache_*")
        content = cache_log.read_text()
        assert "Cache saved: k" in content
        assert "Logging to" not in content


class TestConsoleFilter:
    def test_hides_cache_debug(self):
        accept = log_settings._console_filter(cache_debug=False)
        assert not accept(_record(log_settings.CACHE_LOGGER, "DEBUG"))
        assert accept(_record(log_settings.CACHE_LOGGER, "INFO"))
        assert accept(_record("app.services.base", "DEBUG"))

    def test_cache_debug_shows_everything(self):
        accept = log_settings._console_filter(cache_debug=True)
        assert accept(_record(log_settings.CACHE_LOGGER, "DEBUG"))
