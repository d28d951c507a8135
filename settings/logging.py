"""Logging configuration."""

import sys

from loguru import logger

from settings import LOG_DIR

CACHE_LOGGER = "app.repositories.common.cache"


def _console_filter(cache_debug: bool):
    """Hide per-key cache traffic (hit, saved, evicted) from the console."""

    def accept(record) -> bool:
        if record["name"] != CACHE_LOGGER or cache_debug:
            return True
        return record["level"].no >= logger.level("INFO").no

    return accept


def setup_logging(level: str = "INFO", to_file: bool = True, cache_debug: bool = False):
    """Console output for analytics, a daily file for everything, a separate file for the cache."""
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <cyan>{name}</cyan> | {message}",
        level=level,
        colorize=True,
        filter=_console_filter(cache_debug),
    )

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / "travel_analytics_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            filter=lambda record: record["name"] != CACHE_LOGGER,
            rotation="00:00",
            retention="7 days",
            compression="gz",
        )
        logger.add(
            LOG_DIR / "travel_cache_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}",
            level="DEBUG",
            filter=CACHE_LOGGER,
            rotation="10 MB",
            retention=3,
        )
        logger.info("Logging to {}", LOG_DIR)

    return logger
