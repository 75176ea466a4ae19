"""Resolve a typed player query against the search index."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .day_record import normalize_name
from .results_presenter import SortField, SortOrder, sort_records
from .search_index import PlayerIndexEntry, PlayerRecord, SearchIndex, SearchIndexBuilder

logger = logging.getLogger(__name__)

MIN_SUBSTRING_LENGTH = 2


class SearchStatus(enum.Enum):
    EMPTY = "empty"
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class SearchResult:
    status: SearchStatus
    query: str = ""
    entry: PlayerIndexEntry | None = None

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND


def resolve(index: SearchIndex | None, raw_query: str) -> SearchResult:
    """Exact normalized name first, then a unique substring match; anything else is not found."""
    query = (raw_query or "").strip()
    if not query:
        return SearchResult(SearchStatus.EMPTY)
    if index is None:
        return SearchResult(SearchStatus.NOT_FOUND, query)

    normalized = normalize_name(query)
    entry = index.get(normalized)
    if entry is not None:
        return SearchResult(SearchStatus.FOUND, query, entry)

    if len(normalized) >= MIN_SUBSTRING_LENGTH:
        matches = [
            candidate
            for candidate in index.entries.values()
            if normalized in candidate.canonical_name.lower()
        ]
        if len(matches) == 1:
            return SearchResult(SearchStatus.FOUND, query, matches[0])
        if matches:
            logger.debug("query %r is ambiguous (%d matches)", query, len(matches))

    return SearchResult(SearchStatus.NOT_FOUND, query)


@dataclass(frozen=True)
class SearchOutcome:
    result: SearchResult
    # live typing keeps the previous message on screen instead of showing "no results"
    silent: bool = False


class PlayerSearch:
    """Search box state: builds the index on first use and remembers the shown player."""

    def __init__(
        self,
        builder: SearchIndexBuilder,
        *,
        sort_field: SortField | str = SortField.DAY,
        sort_order: SortOrder | str = SortOrder.DESC,
    ) -> None:
        self.builder = builder
        self.sort_field = SortField(sort_field)
        self.sort_order = SortOrder(sort_order)
        self.current_player: PlayerIndexEntry | None = None

    def focus(self) -> None:
        self.builder.on_search_focus()

    def search(self, raw_query: str, *, live: bool = False) -> SearchOutcome:
        if not (raw_query or "").strip():
            self.current_player = None
            return SearchOutcome(SearchResult(SearchStatus.EMPTY))

        result = resolve(self.builder.ensure_index(), raw_query)
        if result.found:
            self.current_player = result.entry
            return SearchOutcome(result)

        self.current_player = None
        return SearchOutcome(result, silent=live)

    def set_sort(self, field: SortField | str | None = None, order: SortOrder | str | None = None) -> list[PlayerRecord]:
        if field is not None:
            self.sort_field = SortField(field)
        if order is not None:
            self.sort_order = SortOrder(order)
        return self.sorted_records()

    def sorted_records(self) -> list[PlayerRecord]:
        if self.current_player is None:
            return []
        return sort_records(self.current_player, self.sort_field, self.sort_order)
