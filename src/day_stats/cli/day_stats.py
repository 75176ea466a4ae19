"""Print day winners, a full day leaderboard or a player's results."""

import argparse
import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from day_stats.classes.day_detail import PanelState
from day_stats.classes.errors import DayStatsError
from day_stats.classes.results_presenter import SortField, SortOrder
from day_stats.classes.search_resolver import SearchStatus
from day_stats.classes.session import DayStatsSession, View
from day_stats.config import load_settings
from day_stats.formatting import format_day_line, format_leaderboard_line, format_player_results
from day_stats.logging import configure_logging
from day_stats.paths import is_remote_source

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def prompt_confirm(message: str) -> bool:
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(prog="day-stats")
    parser.add_argument("-q", "--quiet", action="store_true", help="Decrease verbosity")
    parser.add_argument("--source", help="URL or path of the day_stats JSON (overrides config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("days", help="List every day with its winner")

    day_parser = subparsers.add_parser("day", help="Show the full leaderboard for a day")
    day_parser.add_argument("day", type=int)
    day_parser.add_argument("-y", "--yes", action="store_true", help="Skip the heavy leaderboard warning")

    player_parser = subparsers.add_parser("player", help="Show a player's results")
    player_parser.add_argument("query")
    player_parser.add_argument("--sort-field", choices=[f.value for f in SortField])
    player_parser.add_argument("--order", choices=[o.value for o in SortOrder])

    return parser.parse_args(argv)


def show_days(session: DayStatsSession) -> int:
    for day in session.cache.days:
        print(format_day_line(day))
    return 0


def show_day(session: DayStatsSession, day_number: int, confirm: Confirm) -> int:
    panel = session.panel(day_number)
    if panel is None:
        print(f"No data for day {day_number}.")
        return 1

    if panel.open() is PanelState.CONFIRMING:
        if not confirm(panel.warning):
            panel.decline()
            return 0
        panel.acknowledge()

    players = panel.players
    if not players:
        print("No players recorded for this day.")
        return 0
    for player in players:
        print(format_leaderboard_line(player))
    return 0


def show_player(
    session: DayStatsSession,
    query: str,
    sort_field: str | None = None,
    order: str | None = None,
) -> int:
    session.show_view(View.PLAYERS)
    outcome = session.search.search(query)
    if outcome.result.status is SearchStatus.EMPTY:
        print("Search for a player to see results.")
        return 1
    if not outcome.result.found:
        print(f'No results for "{query.strip()}".')
        return 1

    records = session.search.set_sort(sort_field, order)
    print(format_player_results(outcome.result.entry, records))
    return 0


async def run(args: argparse.Namespace, session: DayStatsSession, confirm: Confirm = prompt_confirm) -> int:
    try:
        await session.load()
    except DayStatsError as err:
        logger.error("could not load day stats: %s", err)
        print(f"{err}. Check the JSON endpoint.")
        return 1

    if args.command == "days":
        return show_days(session)
    if args.command == "day":
        return show_day(session, args.day, confirm if not args.yes else (lambda _message: True))
    return show_player(session, args.query, args.sort_field, args.order)


def _init_runtime(quiet: bool = False) -> None:
    """Initialize runtime-only side effects for CLI execution."""
    load_dotenv()
    configure_logging("INFO" if quiet else None)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _init_runtime(args.quiet)

    settings = load_settings()
    if args.source:
        source = args.source if is_remote_source(args.source) else str(Path(args.source).resolve())
        settings = replace(settings, data_url=source)

    session = DayStatsSession.from_settings(settings)
    return asyncio.run(run(args, session))


if __name__ == "__main__":
    raise SystemExit(main())
