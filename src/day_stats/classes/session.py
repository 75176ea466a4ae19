"""Session context that owns the dataset cache, the search index and the day panels."""

from __future__ import annotations

import enum
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from day_stats.config import DayStatsSettings
from day_stats.fetch import make_source_fetcher

from .dataset_cache import DatasetCache
from .day_detail import DayDetailController, PanelGroup
from .day_record import DayRecord
from .scheduling import ImmediateScheduler, Scheduler
from .search_index import SearchIndexBuilder
from .search_resolver import PlayerSearch


class View(enum.Enum):
    OPEN = "open"
    PLAYERS = "players"


class DayStatsSession:
    """Everything that lives for one viewing session; ``reload()`` starts it over."""

    def __init__(
        self,
        fetch_payload: Callable[[], Awaitable[Any]],
        *,
        settings: DayStatsSettings | None = None,
        scheduler: Scheduler | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or DayStatsSettings()
        self.logger = logger or logging.getLogger(__name__)
        self.scheduler = scheduler or ImmediateScheduler()
        self.cache = DatasetCache(fetch_payload)
        self.index_builder = SearchIndexBuilder(self.cache, self.scheduler)
        self.panels = PanelGroup(self.scheduler, warning=self.settings.heavy_view_warning)
        self.search = PlayerSearch(
            self.index_builder,
            sort_field=self.settings.default_sort_field,
            sort_order=self.settings.default_sort_order,
        )
        self.view = View.OPEN

    @classmethod
    def from_settings(cls, settings: DayStatsSettings, **kwargs: Any) -> "DayStatsSession":
        return cls(make_source_fetcher(settings), settings=settings, **kwargs)

    async def load(self) -> tuple[DayRecord, ...]:
        days = await self.cache.fetch_and_cache()
        self.panels.attach(days)
        return days

    def panel(self, day_number: int) -> DayDetailController | None:
        record = self.cache.get_day(day_number)
        if record is None:
            return None
        return self.panels.controller_for(record)

    def show_view(self, view: View | str) -> None:
        self.view = View(view)
        if self.view is View.PLAYERS:
            self.index_builder.schedule_build()

    def reload(self) -> None:
        self.logger.info("reloading day stats session")
        self.panels.reset()
        self.index_builder.reset()
        self.search.current_player = None
        self.cache.reload()
