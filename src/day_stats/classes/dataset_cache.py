"""Single-flight cache over the fetched day dataset."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from .day_record import DayRecord
from .errors import DayStatsError, FormatError

DAY_LIST_FIELD = "day_stats"


def parse_day_stats(payload: Any) -> tuple[tuple[DayRecord, ...], dict[int, DayRecord]]:
    """Validate the raw payload and return days sorted descending plus a day lookup."""
    if not isinstance(payload, Mapping):
        raise FormatError("Unexpected data format")
    raw_days = payload.get(DAY_LIST_FIELD)
    if not isinstance(raw_days, list):
        raise FormatError(f"Unexpected data format: missing '{DAY_LIST_FIELD}' list")
    if not raw_days:
        raise FormatError("No days available yet")

    records: list[DayRecord] = []
    for position, raw_day in enumerate(raw_days):
        if not isinstance(raw_day, Mapping):
            raise FormatError(f"Day entry {position} is not an object")
        day_number = raw_day.get("day")
        if isinstance(day_number, bool) or not isinstance(day_number, int):
            raise FormatError(f"Day entry {position} has no integer 'day'")
        raw_players = raw_day.get("players")
        if not isinstance(raw_players, list):
            raise FormatError(f"Day {day_number} has no 'players' list")
        if not all(isinstance(p, Mapping) for p in raw_players):
            raise FormatError(f"Day {day_number} contains a malformed player entry")
        records.append(DayRecord.from_payload(day_number, raw_players))

    # sorted() is stable, so duplicate day numbers keep their source order
    days = tuple(sorted(records, key=lambda record: record.day_number, reverse=True))
    lookup: dict[int, DayRecord] = {}
    for record in days:
        lookup.setdefault(record.day_number, record)
    return days, lookup


class DatasetCache:
    """Owns the canonical day collection for a session.

    The first ``fetch_and_cache()`` call starts the fetch as a task; callers arriving
    while it is in flight await that same task, and once it resolves the parsed days are
    returned directly. A failed fetch stays failed until ``reload()``.
    """

    def __init__(
        self,
        fetch_payload: Callable[[], Awaitable[Any]],
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._fetch_payload = fetch_payload
        self.fetch_count = 0
        self.generation = 0
        self._days: tuple[DayRecord, ...] | None = None
        self._lookup: dict[int, DayRecord] = {}
        self._task: asyncio.Task | None = None

    @property
    def is_ready(self) -> bool:
        return self._days is not None

    @property
    def days(self) -> tuple[DayRecord, ...]:
        """Sorted days, or an empty tuple while nothing has been loaded."""
        return self._days or ()

    def get_day(self, day_number: int | str) -> DayRecord | None:
        try:
            key = int(day_number)
        except (TypeError, ValueError):
            return None
        return self._lookup.get(key)

    async def fetch_and_cache(self) -> tuple[DayRecord, ...]:
        if self._days is not None:
            return self._days
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._load(self.generation))
        # shield: a cancelled caller must not cancel the fetch other callers share
        return await asyncio.shield(self._task)

    async def _load(self, generation: int) -> tuple[DayRecord, ...]:
        self.fetch_count += 1
        self.logger.debug("fetching day dataset (generation %d)", generation)
        try:
            payload = await self._fetch_payload()
            days, lookup = parse_day_stats(payload)
        except DayStatsError as err:
            self.logger.error("day dataset load failed: %s", err)
            raise

        if generation != self.generation:
            self.logger.info("discarding dataset from stale generation %d", generation)
            return days

        self._days = days
        self._lookup = lookup
        self.logger.info("cached %d days (generation %d)", len(days), generation)
        return days

    def reload(self) -> None:
        """Drop the cached dataset; the next fetch starts a new generation."""
        self.generation += 1
        self._days = None
        self._lookup = {}
        self._task = None
        self.logger.debug("dataset cache reset to generation %d", self.generation)
