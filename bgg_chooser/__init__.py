"""
BGG Chooser Package - pick a board game from BoardGameGeek collections.

This package provides:
1. Fetching and caching users' collections from the BGG XML API 2
2. Filtering, sorting and combining collections to choose what to play
"""

__version__ = "0.1.0"
__author__ = "BGG Chooser Team"

# Main package imports for convenience
from .collection import BGGCollectionClient
from .chooser import ChooserSession, ChooserState, FilterSpec, SortSpec
from .history import HistoryDatabase
from .models import GameRecord, CollectionFetchResult, HistoryEntry
from .logging_config import setup_logging

__all__ = [
    "BGGCollectionClient",
    "ChooserSession",
    "ChooserState",
    "FilterSpec",
    "SortSpec",
    "HistoryDatabase",
    "GameRecord",
    "CollectionFetchResult",
    "HistoryEntry",
    "setup_logging",
]
