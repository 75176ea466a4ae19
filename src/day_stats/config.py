"""day_stats configuration helpers."""

from __future__ import annotations

import enum
import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from day_stats.classes.results_presenter import SortField, SortOrder
from day_stats.paths import repo_file

logger = logging.getLogger(__name__)

DEFAULT_DATA_URL = "data/day_stats.json"
DEFAULT_TIMEOUT_SEC = 15
HEAVY_VIEW_WARNING = (
    "Loading the full leaderboard may strain your device. Continue only if you need the details."
)


@dataclass(frozen=True)
class DayStatsSettings:
    data_url: str = DEFAULT_DATA_URL
    timeout_sec: int = DEFAULT_TIMEOUT_SEC
    heavy_view_warning: str = HEAVY_VIEW_WARNING
    default_sort_field: str = "day"
    default_sort_order: str = "desc"


def load_json_config(path: Path) -> dict[str, Any]:
    """Read a JSON config file, returning an empty mapping when it does not exist."""
    if not path.is_file():
        logger.debug("config file %s not found, using defaults", path)
        return {}
    with open(path, encoding="utf-8") as fp:
        data = json.load(fp)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return data


def _coerce_timeout(value: Any, fallback: int) -> int:
    try:
        timeout = int(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid timeout %r", value)
        return fallback
    return timeout if timeout > 0 else fallback


def _coerce_choice(value: Any, choices: type[enum.Enum], fallback: str) -> str:
    try:
        return choices(str(value).strip().lower()).value
    except ValueError:
        logger.warning("Ignoring invalid %s %r", choices.__name__, value)
        return fallback


def resolve_settings(config_data: Mapping[str, Any]) -> DayStatsSettings:
    section = config_data.get("day_stats", config_data)
    if not isinstance(section, Mapping):
        raise ValueError("Config key 'day_stats' must contain a JSON object")
    defaults = DayStatsSettings()
    return DayStatsSettings(
        data_url=str(section.get("data_url") or defaults.data_url),
        timeout_sec=_coerce_timeout(section.get("timeout_sec", defaults.timeout_sec), defaults.timeout_sec),
        heavy_view_warning=str(section.get("heavy_view_warning") or defaults.heavy_view_warning),
        default_sort_field=_coerce_choice(
            section.get("default_sort_field") or defaults.default_sort_field, SortField, defaults.default_sort_field
        ),
        default_sort_order=_coerce_choice(
            section.get("default_sort_order") or defaults.default_sort_order, SortOrder, defaults.default_sort_order
        ),
    )


def apply_environment_overrides(settings: DayStatsSettings) -> DayStatsSettings:
    data_url = os.getenv("DAY_STATS_URL")
    if data_url:
        settings = replace(settings, data_url=data_url)
    timeout = os.getenv("DAY_STATS_TIMEOUT")
    if timeout:
        settings = replace(settings, timeout_sec=_coerce_timeout(timeout, settings.timeout_sec))
    return settings


def load_settings() -> DayStatsSettings:
    config_data = load_json_config(repo_file("config.json"))
    return apply_environment_overrides(resolve_settings(config_data))
