"""Plain-text rendering for days, leaderboards and player results."""

from __future__ import annotations

import re

from day_stats.classes.day_record import DayRecord, PlayerEntry
from day_stats.classes.search_index import PlayerIndexEntry, PlayerRecord

_INSTAGRAM_UNSAFE = re.compile(r"[^a-z0-9._-]", re.IGNORECASE)
NO_NAME = "—"


def ordinal(rank: int | None) -> str:
    if rank is None:
        return "?."
    mod100 = rank % 100
    if 11 <= mod100 <= 13:
        return f"{rank}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{rank}{suffix}"


def build_instagram_link(name: str | None) -> str:
    if not name:
        return "#"
    return f"https://instagram.com/{_INSTAGRAM_UNSAFE.sub('', name)}"


def format_day_line(day: DayRecord) -> str:
    winner = day.winner
    if winner is None:
        return f"Day {day.day_number}: {NO_NAME}"
    return f"Day {day.day_number}: {winner.name} (Daily winner) Rectangles: {winner.box_count}"


def format_leaderboard_line(player: PlayerEntry) -> str:
    return f"{ordinal(player.rank)}  {player.name}  Time: {player.time} • Rectangles: {player.box_count}"


def format_player_summary(entry: PlayerIndexEntry, count: int) -> str:
    day_label = "day" if count == 1 else "days"
    return f"Showing {count} {day_label} for {entry.canonical_name}."


def format_player_record(entry: PlayerIndexEntry, record: PlayerRecord) -> str:
    return (
        f"Day {record.day}  {entry.canonical_name}  Time: {record.time}  "
        f"Rectangles: {record.box_count}  Rank {record.rank}"
    )


def format_player_results(entry: PlayerIndexEntry, records: list[PlayerRecord]) -> str:
    if not records:
        return "No stats available."
    lines = [format_player_summary(entry, len(records))]
    lines.extend(format_player_record(entry, record) for record in records)
    return "\n".join(lines)
