"""
Chooser module: filtering, sorting and aggregation of loaded collections.

This package handles:
- Player-count and play-time filters
- Sorters and the active sort direction
- Merging collections and deriving filter options
- The session that ties loading, filtering and sorting together
"""

from .aggregation import displayed_games, get_player_options, get_time_options, merge_collections, total_owned
from .filters import FilterSpec, extend_time, select_time
from .session import ChooserSession, ChooserState
from .sorting import SORTERS, Sorter, SortDirection, SortSpec, default_sort_spec, sort_records

__all__ = [
    "ChooserSession",
    "ChooserState",
    "FilterSpec",
    "SORTERS",
    "Sorter",
    "SortDirection",
    "SortSpec",
    "default_sort_spec",
    "displayed_games",
    "extend_time",
    "get_player_options",
    "get_time_options",
    "merge_collections",
    "select_time",
    "sort_records",
    "total_owned",
]
