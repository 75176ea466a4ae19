"""Day and player records built from the raw ``day_stats`` payload."""

from __future__ import annotations

import math
import re
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Mapping

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")


def normalize_name(name: str) -> str:
    """Index key for a player name: trimmed and lower-cased."""
    return name.strip().lower()


def collation_key(name: str) -> str:
    """Accent- and case-insensitive sort key for display names."""
    stripped = "".join(c for c in unicodedata.normalize("NFD", name) if unicodedata.category(c) != "Mn")
    return stripped.casefold()


def resolve_box_count(raw_value: Any) -> int:
    """Return the positive box count for a player, defaulting to 1."""
    if isinstance(raw_value, bool):
        return 1
    if isinstance(raw_value, (int, float)):
        if math.isfinite(raw_value) and raw_value > 0:
            return max(1, math.floor(raw_value + 0.5))
        return 1
    if isinstance(raw_value, str):
        match = _LEADING_INT.match(raw_value)
        if match:
            parsed = int(match.group(1))
            if parsed > 0:
                return parsed
    return 1


def _to_number(value: str) -> float | None:
    value = value.strip()
    if not value:
        return 0.0
    if not _DECIMAL.match(value):
        return None
    return float(value)


def parse_time_to_seconds(time_string: Any) -> float:
    """Convert ``m:ss`` / ``mm:ss`` to seconds; anything unparsable is +inf."""
    if not isinstance(time_string, str):
        return math.inf
    parts = time_string.split(":")
    if len(parts) < 2:
        return math.inf
    minutes = _to_number(parts[0])
    seconds = _to_number(parts[1])
    if minutes is None or seconds is None:
        return math.inf
    return minutes * 60 + seconds


def coerce_rank(raw_rank: Any) -> int | None:
    if isinstance(raw_rank, bool):
        return None
    if isinstance(raw_rank, int):
        return raw_rank
    if isinstance(raw_rank, float):
        return int(raw_rank) if raw_rank.is_integer() else None
    if isinstance(raw_rank, str):
        value = raw_rank.strip()
        try:
            return int(value)
        except ValueError:
            pass
        try:
            number = float(value)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def rank_sort_value(rank: int | None) -> float:
    return math.inf if rank is None else float(rank)


@dataclass(frozen=True)
class PlayerEntry:
    """One player's result on a given day."""

    name: str
    rank: int | None
    time: str
    box_count: int = 1

    @classmethod
    def from_payload(cls, raw: Mapping[str, Any]) -> "PlayerEntry":
        name = raw.get("name")
        time = raw.get("time")
        return cls(
            name=name if isinstance(name, str) else ("" if name is None else str(name)),
            rank=coerce_rank(raw.get("rank")),
            time=time if isinstance(time, str) else ("" if time is None else str(time)),
            box_count=resolve_box_count(raw.get("boxs")),
        )

    @property
    def seconds(self) -> float:
        return parse_time_to_seconds(self.time)


def resolve_winner(players: tuple[PlayerEntry, ...]) -> PlayerEntry | None:
    """First player holding the numerically smallest rank."""
    best = None
    for player in players:
        if best is None or rank_sort_value(player.rank) < rank_sort_value(best.rank):
            best = player
    return best


@dataclass(eq=False)
class DayRecord:
    """One day's results. The winner is resolved up-front; the full ordering is deferred."""

    day_number: int
    players: tuple[PlayerEntry, ...]
    winner: PlayerEntry | None = field(init=False)
    sort_count: int = field(default=0, init=False)
    _sorted_players: tuple[PlayerEntry, ...] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.players = tuple(self.players)
        self.winner = resolve_winner(self.players)

    @classmethod
    def from_payload(cls, day_number: int, raw_players: list[Mapping[str, Any]]) -> "DayRecord":
        return cls(day_number, tuple(PlayerEntry.from_payload(p) for p in raw_players))

    @property
    def has_sorted_players(self) -> bool:
        return self._sorted_players is not None

    @property
    def sorted_players(self) -> tuple[PlayerEntry, ...]:
        """Players ordered by rank, ties kept in source order. Computed once."""
        if self._sorted_players is None:
            ordered = sorted(
                enumerate(self.players),
                key=lambda item: (rank_sort_value(item[1].rank), item[0]),
            )
            self._sorted_players = tuple(player for _, player in ordered)
            self.sort_count += 1
        return self._sorted_players

    def __repr__(self) -> str:
        return "DayRecord(day={}, players={}, winner={})".format(
            self.day_number, len(self.players), self.winner.name if self.winner else None
        )
