"""
Main CLI entry point for BGG Chooser package.
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from ..chooser import SORTERS, ChooserSession, ChooserState, FilterSpec, SortSpec, default_sort_spec
from ..collection import BGGCollectionClient
from ..config import DEFAULT_MAX_AGE, HISTORY_DB_PATH
from ..error_handling import handle_errors
from ..formatting import format_minutes, format_minutes_range
from ..history import HistoryDatabase
from ..logging_config import setup_logging
from ..models import GameRecord

logger = logging.getLogger(__name__)


def parse_time_range(value: str) -> Tuple[int, int]:
    """Parse "60" as up to an hour and "30-120" as a closed range."""
    try:
        if "-" in value:
            low, high = (int(part) for part in value.split("-", 1))
        else:
            low, high = 0, int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid time range: {value}")
    if low < 0 or low > high:
        raise argparse.ArgumentTypeError(f"Invalid time range: {value}")
    return (low, high)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pick a game from one or more BGG collections")
    parser.add_argument("usernames", nargs="*", help="BGG usernames whose collections are combined")
    parser.add_argument("--players", type=int, default=None, help="Number of players (8 means 8 or more)")
    parser.add_argument("--time", type=parse_time_range, default=None, help="Play time in minutes: MAX or MIN-MAX")
    parser.add_argument("--sort", choices=[s.name for s in SORTERS], default=None, help="Sort key")
    parser.add_argument("--reverse", action="store_true", help="Reverse the sort direction")
    parser.add_argument("--refresh", action="store_true", help="Ignore cached collections")
    parser.add_argument("--concurrent", action="store_true", help="Fetch all collections at once")
    parser.add_argument("--history", action="store_true", help="List past searches and exit")
    parser.add_argument("--from-history", type=int, default=None, metavar="N", help="Load the Nth past search (1 = latest)")
    parser.add_argument("--forget", type=str, default=None, metavar="ID", help="Delete a past search and exit")
    parser.add_argument("--db", type=Path, default=HISTORY_DB_PATH, help="History database path")
    parser.add_argument("--log-file", type=str, default=None, help="Custom log file name or absolute path")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages")
    return parser


def initial_sort(name: Optional[str], reverse: bool) -> Optional[SortSpec]:
    if name is None and not reverse:
        return None
    base = default_sort_spec(SORTERS)
    if name is not None:
        index = [s.name for s in SORTERS].index(name)
        base = SortSpec(active_index=index, direction=SORTERS[index].default_direction)
    if reverse:
        base = SortSpec(active_index=base.active_index, direction=base.direction.invert())
    return base


@handle_errors(default_return=None)
def open_history(db_path: Path) -> Optional[HistoryDatabase]:
    return HistoryDatabase(db_path)


async def run_chooser(
    usernames: List[str],
    filter_spec: FilterSpec,
    sort_spec: Optional[SortSpec] = None,
    max_age: float = DEFAULT_MAX_AGE,
    concurrent: bool = False,
    history: Optional[HistoryDatabase] = None,
    client: Optional[BGGCollectionClient] = None,
) -> ChooserState:
    """
    Load the collections and return the final state.

    Args:
        usernames: BGG usernames
        filter_spec: Filter to apply
        sort_spec: Sort to apply, default best rated first
        max_age: Maximum age of cached collections
        concurrent: Fetch collections at once
        history: History store updated after the load
        client: Client to use; a new one is opened when omitted
    """
    async with (client or BGGCollectionClient()) as active_client:
        session = ChooserSession(active_client, history=history, filter_spec=filter_spec, sort_spec=sort_spec)
        state = session.state()
        async for state in session.load_collections(usernames, max_age=max_age, concurrent=concurrent):
            done = len(state.loaded) + len(state.failed)
            if done:
                logger.info(f"{done}/{done + state.pending} collections done: {state.summary()}")
        return state


def format_game(game: GameRecord) -> str:
    stats = game.stats
    parts = [game.name if game.year_published is None else f"{game.name} ({game.year_published})"]
    if stats is not None:
        if stats.min_players is not None and stats.max_players is not None:
            if stats.min_players == stats.max_players:
                parts.append(f"{stats.min_players}p")
            else:
                parts.append(f"{stats.min_players}-{stats.max_players}p")
        if stats.min_play_time is not None and stats.max_play_time is not None:
            parts.append(format_minutes_range((stats.min_play_time, stats.max_play_time)))
        elif stats.playing_time is not None:
            parts.append(format_minutes(stats.playing_time))
        if stats.rating is not None and stats.rating.average is not None:
            parts.append(f"★ {stats.rating.average:.1f}")
    return " | ".join(parts)


def print_state(state: ChooserState) -> None:
    sorter = state.sort.active(SORTERS)
    print("\n" + "="*60)
    print(state.summary().upper())
    print(f"Sorted by {sorter.name} ({state.sort.direction.value})")
    print("="*60)
    for game in state.games:
        print(f"- {format_game(game)}")
    if state.failed:
        print("\nCould not load:")
        for name, kind in state.failed.items():
            print(f"  └─ {name}: {kind}")
    print("="*60)


def print_history(history: Optional[HistoryDatabase]) -> None:
    print("\n" + "="*60)
    print("PAST SEARCHES")
    print("="*60)
    entries = history.load() if history is not None else []
    if not entries:
        print("No past searches.")
    for position, entry in enumerate(entries, 1):
        print(f"{position}. {', '.join(entry.names)}  [{entry.id}]")
    print("="*60)


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point for choosing a game."""
    try:
        parser = build_parser()
        args = parser.parse_args(argv)

        # Build a default per-run log filename when not provided
        if args.log_file:
            log_file = args.log_file
        else:
            ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"run_{ts}.log"

        setup_logging(log_file, level=logging.DEBUG if args.verbose else logging.INFO)
        history = open_history(args.db)

        if args.forget:
            if history is not None:
                history.delete(args.forget)
            print_history(history)
            return
        if args.history:
            print_history(history)
            return

        usernames = list(args.usernames)
        if args.from_history is not None:
            entries = history.load() if history is not None else []
            if not 1 <= args.from_history <= len(entries):
                parser.error(f"No past search number {args.from_history}")
            usernames = entries[args.from_history - 1].names
        if not [name for name in usernames if name]:
            parser.error("At least one username is required")

        state = asyncio.run(run_chooser(
            usernames,
            FilterSpec(players=args.players, time=args.time),
            sort_spec=initial_sort(args.sort, args.reverse),
            max_age=0 if args.refresh else DEFAULT_MAX_AGE,
            concurrent=args.concurrent,
            history=history,
        ))
        print_state(state)

    except KeyboardInterrupt:
        print("\nProcess interrupted by user")
    except Exception as e:
        logger.error(f"Unexpected error in main: {e}")
        raise


if __name__ == "__main__":
    main()
