"""Sorting of a player's per-day records for display."""

from __future__ import annotations

import enum

from .day_record import rank_sort_value
from .search_index import PlayerIndexEntry, PlayerRecord


class SortField(str, enum.Enum):
    DAY = "day"
    RANK = "rank"
    TIME = "time"


class SortOrder(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


def _project(record: PlayerRecord, field: SortField) -> float:
    if field is SortField.DAY:
        return float(record.day)
    if field is SortField.RANK:
        return rank_sort_value(record.rank)
    return record.seconds


def sort_records(
    entry: PlayerIndexEntry,
    field: SortField | str = SortField.DAY,
    order: SortOrder | str = SortOrder.ASC,
) -> list[PlayerRecord]:
    """Return ``entry.records`` ordered by ``field``; equal keys keep their stored order.

    Unparsable times count as +inf, so they come last ascending and first descending.
    """
    field = SortField(field)
    order = SortOrder(order)
    direction = 1 if order is SortOrder.ASC else -1

    decorated = [
        (direction * _project(record, field), position, record)
        for position, record in enumerate(entry.records)
    ]
    decorated.sort(key=lambda item: (item[0], item[1]))
    return [record for _, _, record in decorated]
