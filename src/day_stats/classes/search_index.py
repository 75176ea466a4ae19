"""Name-keyed player index, built once per dataset and only when search is used."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .dataset_cache import DatasetCache
from .day_record import DayRecord, collation_key, normalize_name
from .scheduling import ImmediateScheduler, Scheduler


@dataclass(frozen=True)
class PlayerRecord:
    """One day's result for an indexed player."""

    day: int
    rank: int | None
    time: str
    seconds: float
    box_count: int = 1


@dataclass
class PlayerIndexEntry:
    normalized_name: str
    canonical_name: str
    records: list[PlayerRecord] = field(default_factory=list)


@dataclass(frozen=True)
class SearchIndex:
    entries: dict[str, PlayerIndexEntry]
    suggestions: tuple[str, ...]
    generation: int = 0

    def get(self, normalized_name: str) -> PlayerIndexEntry | None:
        return self.entries.get(normalized_name)

    def __contains__(self, normalized_name: object) -> bool:
        return normalized_name in self.entries

    def __len__(self) -> int:
        return len(self.entries)


def build_search_index(days: Iterable[DayRecord], generation: int = 0) -> SearchIndex:
    """Group every player appearance by normalized name, keeping first-seen casing."""
    entries: dict[str, PlayerIndexEntry] = {}
    for day in days:
        for player in day.players:
            key = normalize_name(player.name)
            if not key:
                continue
            entry = entries.get(key)
            if entry is None:
                entry = PlayerIndexEntry(normalized_name=key, canonical_name=player.name)
                entries[key] = entry
            entry.records.append(
                PlayerRecord(
                    day=day.day_number,
                    rank=player.rank,
                    time=player.time,
                    seconds=player.seconds,
                    box_count=player.box_count,
                )
            )

    suggestions = tuple(
        sorted(
            (entry.canonical_name for entry in entries.values()),
            key=lambda name: (collation_key(name), name),
        )
    )
    return SearchIndex(entries=entries, suggestions=suggestions, generation=generation)


class SearchIndexBuilder:
    """Builds the search index the first time search is touched, once per cache generation."""

    def __init__(
        self,
        cache: DatasetCache,
        scheduler: Scheduler | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.cache = cache
        self.scheduler = scheduler or ImmediateScheduler()
        self.logger = logger or logging.getLogger(__name__)
        self.build_count = 0
        self._index: SearchIndex | None = None
        self._building = False
        self._task: asyncio.Task | None = None
        self._task_generation: int | None = None

    @property
    def index(self) -> SearchIndex | None:
        return self._index if self.is_ready else None

    @property
    def is_ready(self) -> bool:
        return self._index is not None and self._index.generation == self.cache.generation

    @property
    def suggestions(self) -> tuple[str, ...]:
        index = self.index
        return index.suggestions if index is not None else ()

    def ensure_index(self) -> SearchIndex | None:
        """Build the index if the dataset is loaded; no-op once built for this generation."""
        if self.is_ready:
            return self._index
        if not self.cache.is_ready:
            self.logger.debug("search index requested before the dataset is ready")
            return None
        if self._building:
            return None

        self._building = True
        try:
            index = build_search_index(self.cache.days, self.cache.generation)
        finally:
            self._building = False

        self._index = index
        self.build_count += 1
        self.logger.info(
            "built search index: %d players (generation %d)", len(index), index.generation
        )
        return index

    def schedule_build(self) -> None:
        """Queue the build behind the scheduler so it does not block an imminent paint."""
        if self.is_ready:
            return
        self.scheduler.defer(self.ensure_index)

    def on_search_focus(self) -> SearchIndex | None:
        return self.ensure_index()

    async def ensure_index_async(self) -> SearchIndex | None:
        """Wait for the dataset, then build; concurrent callers share one build."""
        if self.is_ready:
            return self._index
        generation = self.cache.generation
        if self._task is None or self._task_generation != generation:
            self._task = asyncio.get_running_loop().create_task(self._build_when_ready())
            self._task_generation = generation
        return await asyncio.shield(self._task)

    async def _build_when_ready(self) -> SearchIndex | None:
        await self.cache.fetch_and_cache()
        return self.ensure_index()

    def reset(self) -> None:
        self._index = None
        self._task = None
        self._task_generation = None
