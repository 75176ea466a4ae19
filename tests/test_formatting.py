import pytest

from day_stats.classes.day_record import DayRecord, PlayerEntry
from day_stats.classes.search_index import PlayerIndexEntry, PlayerRecord
from day_stats.formatting import (
    build_instagram_link,
    format_day_line,
    format_leaderboard_line,
    format_player_results,
    ordinal,
)


@pytest.mark.parametrize(
    "rank, expected",
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (13, "13th"), (22, "22nd"), (111, "111th")],
)
def test_ordinal(rank, expected):
    assert ordinal(rank) == expected


def test_build_instagram_link_strips_unsafe_characters():
    assert build_instagram_link("Bo Jo!_x.y") == "https://instagram.com/BoJo_x.y"
    assert build_instagram_link(None) == "#"


def test_format_day_line_with_and_without_winner():
    day = DayRecord.from_payload(2, [{"name": "Bo", "rank": 1, "time": "1:00", "boxs": 3}])

    assert format_day_line(day) == "Day 2: Bo (Daily winner) Rectangles: 3"
    assert format_day_line(DayRecord.from_payload(1, [])) == "Day 1: —"


def test_format_leaderboard_line():
    line = format_leaderboard_line(PlayerEntry(name="Al", rank=2, time="0:50"))

    assert line == "2nd  Al  Time: 0:50 • Rectangles: 1"


def test_format_player_results_summary():
    entry = PlayerIndexEntry(normalized_name="bo", canonical_name="Bo")
    record = PlayerRecord(day=2, rank=1, time="1:00", seconds=60.0)

    assert format_player_results(entry, []) == "No stats available."
    assert format_player_results(entry, [record]).splitlines() == [
        "Showing 1 day for Bo.",
        "Day 2  Bo  Time: 1:00  Rectangles: 1  Rank 1",
    ]
