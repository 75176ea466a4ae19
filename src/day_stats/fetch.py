"""Fetch the raw ``day_stats`` payload over HTTP or from a local JSON file."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any

import requests

from day_stats.classes.errors import FormatError, NetworkError
from day_stats.config import DayStatsSettings
from day_stats.paths import is_remote_source, resolve_data_source

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}

FetchJson = Callable[[str, Mapping[str, str], int], Any]
SourceFetcher = Callable[[], Awaitable[Any]]


def requests_fetch_json(url: str, headers: Mapping[str, str], timeout: int) -> Any:
    """Default JSON fetch using requests; maps failures onto NetworkError/FormatError."""
    try:
        response = requests.get(url, headers=dict(headers), timeout=timeout)
    except requests.RequestException as err:
        raise NetworkError(None, f"Failed to load stats ({err})") from err

    if not response.ok:
        raise NetworkError(response.status_code)

    try:
        return response.json()
    except ValueError as err:
        raise FormatError("Unexpected data format") from err


def file_fetch_json(path: str | Path) -> Any:
    """Read the payload from a local JSON file."""
    try:
        with open(path, encoding="utf-8") as fp:
            return json.load(fp)
    except FileNotFoundError as err:
        raise NetworkError(None, f"Failed to load stats (missing file {path})") from err
    except OSError as err:
        raise NetworkError(None, f"Failed to load stats ({err})") from err
    except ValueError as err:
        raise FormatError("Unexpected data format") from err


def fetch_day_stats_payload(
    source: str,
    *,
    fetch_json: FetchJson = requests_fetch_json,
    headers: Mapping[str, str] | None = None,
    timeout: int = 15,
) -> Any:
    """Fetch the raw payload from ``source``; relative file paths are read from the project root."""
    if is_remote_source(source):
        logger.debug("fetching day stats from %s", source)
        return fetch_json(source, headers or DEFAULT_HEADERS, timeout)
    path = resolve_data_source(source)
    logger.debug("reading day stats from %s", path)
    return file_fetch_json(path)


def make_source_fetcher(
    settings: DayStatsSettings,
    *,
    fetch_json: FetchJson = requests_fetch_json,
) -> SourceFetcher:
    """Build the coroutine used by DatasetCache; blocking I/O runs in a worker thread."""

    async def fetch() -> Any:
        return await asyncio.to_thread(
            fetch_day_stats_payload,
            settings.data_url,
            fetch_json=fetch_json,
            timeout=settings.timeout_sec,
        )

    return fetch
