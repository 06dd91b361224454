"""
Player-count and play-time filtering of collection records.
"""

import math
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from ..config import MAX_PLAYERS
from ..formatting import format_minutes, format_minutes_range
from ..models import GameRecord

TimeRange = Tuple[int, int]


@dataclass(frozen=True)
class FilterSpec:
    """
    Filter chosen by the user.

    players: exact player count, or MAX_PLAYERS for the open-ended "8+" bracket
    time: closed range of minutes the whole play time of a game must fit in
    """
    players: Optional[int] = None
    time: Optional[TimeRange] = None

    def __post_init__(self):
        if self.time is not None:
            low, high = self.time
            if low > high:
                raise ValueError(f"Invalid time range {low}-{high}")
            object.__setattr__(self, "time", (int(low), int(high)))

    @property
    def is_empty(self) -> bool:
        return self.players is None and self.time is None

    def with_players(self, players: Optional[int]) -> "FilterSpec":
        return replace(self, players=players)

    def with_time(self, time: Optional[TimeRange]) -> "FilterSpec":
        return replace(self, time=time)

    def matches(self, record: GameRecord) -> bool:
        """Whether an owned record fits the player count and time window."""
        if not record.is_owned:
            return False

        stats = record.stats
        min_players = _stat(stats, "min_players", 0)
        max_players = _stat(stats, "max_players", math.inf)
        # A game without its own play time fits whatever window is selected
        min_time = _stat(stats, "min_play_time", self.time[0] if self.time else 0)
        max_time = _stat(stats, "max_play_time", self.time[1] if self.time else math.inf)

        players = self.players
        matches_players = (
            players is None
            or min_players <= players <= max_players
            or (players == MAX_PLAYERS and min_players > players)
        )
        matches_time = self.time is None or (self.time[0] <= min_time and max_time <= self.time[1])
        return matches_players and matches_time

    def describe(self) -> Optional[str]:
        """Human readable form, e.g. "for 8+ players in 1h"; None when nothing is filtered."""
        if self.is_empty:
            return None

        descriptions: List[str] = []
        if self.players == MAX_PLAYERS:
            descriptions.append(f"for {MAX_PLAYERS}+ players")
        elif self.players == 1:
            descriptions.append("for 1 player")
        elif self.players is not None:
            descriptions.append(f"for {self.players} players")

        if self.time is not None:
            if self.time[0] == 0:
                descriptions.append(f"in {format_minutes(self.time[1])}")
            else:
                descriptions.append(f"in {format_minutes_range(self.time)}")

        return " ".join(descriptions)


def _stat(stats, name: str, default):
    value = getattr(stats, name) if stats is not None else None
    return default if value is None else value


def select_time(minutes: int) -> TimeRange:
    """Plain selection of a bracket: anything up to `minutes`."""
    return (0, minutes)


def extend_time(current: Optional[TimeRange], minutes: int, options: Sequence[int]) -> Optional[TimeRange]:
    """
    Grow, shrink or clear the selected time range around a bracket.

    Args:
        current: Currently selected range, if any
        minutes: Bracket the user extended the selection with
        options: Available brackets, ascending

    Returns:
        The new range, or None to clear the time filter
    """
    options = list(options)
    if current is None or minutes not in options or current[1] not in options:
        return select_time(minutes)

    low, high = current
    index = options.index(minutes)
    index_high = options.index(high)

    if low == 0:
        if high != minutes:
            return (min(high, minutes), max(high, minutes))
        return None
    if minutes < low:
        return (minutes, high)
    if minutes > high:
        return (low, minutes)
    if minutes == low:
        return _collapse((options[min(index + 1, index_high)], high))
    if minutes == high:
        return _collapse((low, options[max(index - 1, 0)]))
    if low in options:
        # Clamp the bound nearer to the chosen bracket
        if index - options.index(low) <= index_high - index:
            return (minutes, high)
        return (low, minutes)
    return None


def _collapse(bounds: TimeRange) -> TimeRange:
    low, high = bounds
    if low >= high:
        return select_time(high)
    return bounds
