"""
Merging of several users' collections and derivation of filter options.
"""

from typing import Iterable, List, Sequence, Tuple

from ..config import BASE_TIME_BRACKETS, DEFAULT_PLAYER_OPTIONS, DEFAULT_TIME_OPTIONS, TIME_BRACKET_STEP
from ..models import CollectionFetchResult, GameRecord
from .filters import FilterSpec
from .sorting import SORTERS, Sorter, SortSpec, sort_records


def dedupe(records: Iterable[GameRecord]) -> List[GameRecord]:
    """Keep the first record of every identity (game + collection entry)."""
    seen = set()
    unique = []
    for record in records:
        if record.identity not in seen:
            seen.add(record.identity)
            unique.append(record)
    return unique


def merge_collections(results: Iterable[CollectionFetchResult]) -> List[GameRecord]:
    """Flatten collections in the given order, dropping repeated copies."""
    return dedupe(record for result in results for record in result.items)


def total_owned(records: Iterable[GameRecord]) -> int:
    return len({record.identity for record in records if record.is_owned})


def displayed_games(
    results: Iterable[CollectionFetchResult],
    filter_spec: FilterSpec,
    sort_spec: SortSpec,
    sorters: Sequence[Sorter] = SORTERS,
) -> List[GameRecord]:
    """The list shown to the user: merged, filtered, then stably sorted."""
    matching = [record for record in merge_collections(results) if filter_spec.matches(record)]
    return sort_records(matching, sort_spec, sorters)


def get_player_options(records: Sequence[GameRecord]) -> Tuple[int, int]:
    """Range of player counts to offer, from the smallest minimum to the largest maximum."""
    if not records:
        return DEFAULT_PLAYER_OPTIONS
    minimums = [r.stats.min_players for r in records if r.stats is not None and r.stats.min_players is not None]
    maximums = [r.stats.max_players for r in records if r.stats is not None and r.stats.max_players is not None]
    return (
        min(minimums, default=DEFAULT_PLAYER_OPTIONS[0]),
        max(maximums, default=DEFAULT_PLAYER_OPTIONS[1]),
    )


def get_time_options(records: Sequence[GameRecord]) -> List[int]:
    """
    Time brackets (in minutes) covering every play time in the records.

    Starts from the base brackets, drops those below the shortest game,
    prepends the shortest time when it is below the first bracket and then
    adds hourly brackets until the longest game fits.
    """
    times = sorted({
        value
        for record in records
        if record.stats is not None
        for value in (record.stats.min_play_time, record.stats.max_play_time)
        if value is not None
    })
    if not times:
        return list(DEFAULT_TIME_OPTIONS)

    brackets = [minutes for minutes in BASE_TIME_BRACKETS if minutes >= times[0]]
    if not brackets:
        brackets.append(60)
    if times[0] < brackets[0]:
        brackets.insert(0, times[0])
    while brackets[-1] < times[-1]:
        brackets.append(brackets[-1] + TIME_BRACKET_STEP)
    return brackets
