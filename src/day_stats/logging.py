"""Logging setup shared by the day-stats command line entry points."""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path

from day_stats.paths import repo_file

NOISY_LIBRARY_LOGGERS = ("urllib3", "requests", "asyncio")
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_CONFIG_ENV = "DAY_STATS_LOG_CONFIG"
HANDLER_NAME = "day_stats.console"


def resolve_level(level: str | int | None = None) -> int:
    """Explicit level first, then ``LOG_LEVEL``; unknown names fall back to DEBUG."""
    if isinstance(level, int):
        return level
    level_name = (level or os.getenv("LOG_LEVEL") or "DEBUG").upper()
    resolved = logging.getLevelName(level_name)
    return resolved if isinstance(resolved, int) else logging.DEBUG


def logging_config_path() -> Path:
    override = os.getenv(LOG_CONFIG_ENV)
    return Path(override) if override else repo_file("logging.ini")


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Configure the root logger once per process entry point and return it."""
    root = logging.getLogger()
    config_path = logging_config_path()

    if config_path.is_file():
        logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
    elif not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        handler.set_name(HANDLER_NAME)
        root.addHandler(handler)

    root.setLevel(resolve_level(level))
    for logger_name in NOISY_LIBRARY_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(logging.INFO, root.level))
    return root
