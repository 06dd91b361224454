"""
Session state for choosing a game from one or more collections.

A session loads the collections, keeps the current filter and sort, and
produces the displayed list as an immutable ChooserState snapshot whenever
any of them changes. Display layers only read snapshots.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, List, Optional, Sequence, Tuple

from ..config import DEFAULT_MAX_AGE
from ..error_handling import CollectionError, handle_errors
from ..models import CollectionFetchResult, GameRecord
from .aggregation import displayed_games, get_player_options, get_time_options, merge_collections, total_owned
from .filters import FilterSpec
from .sorting import SORTERS, Sorter, SortSpec, default_sort_spec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChooserState:
    """Everything a display needs to show the current list."""
    games: Tuple[GameRecord, ...]
    total_owned: int
    player_options: Tuple[int, int]
    time_options: Tuple[int, ...]
    pending: int
    loaded: Tuple[str, ...]
    failed: Dict[str, str] = field(default_factory=dict)  # username -> error kind
    filter: FilterSpec = field(default_factory=FilterSpec)
    sort: SortSpec = field(default_factory=SortSpec)

    @property
    def loading(self) -> bool:
        return self.pending > 0

    def summary(self) -> str:
        """List header, e.g. "12 games" or "3 of 12 games for 4 players in 1h"."""
        if self.total_owned == 0:
            return "Loading ..." if self.loading else "no games"
        if len(self.games) == self.total_owned:
            return f"{self.total_owned} games"
        description = self.filter.describe() or ""
        return f"{len(self.games)} of {self.total_owned} games {description}".rstrip()


class ChooserSession:
    """
    Loads collections and keeps the filtered, sorted view of them.
    """

    def __init__(
        self,
        client,
        history=None,
        sorters: Sequence[Sorter] = SORTERS,
        filter_spec: Optional[FilterSpec] = None,
        sort_spec: Optional[SortSpec] = None,
    ):
        """
        Initialize the session.

        Args:
            client: Object with an async fetch_collection(username, max_age)
            history: Optional HistoryDatabase updated after a load
            sorters: Sorters the user can choose from
            filter_spec: Initial filter
            sort_spec: Initial sort, defaults to best rated first
        """
        self.client = client
        self.history = history
        self.sorters = tuple(sorters)
        self.filter = filter_spec or FilterSpec()
        self.sort = sort_spec or default_sort_spec(self.sorters)
        self._results: List[CollectionFetchResult] = []
        self._failed: Dict[str, str] = {}
        self._pending = 0

    def state(self) -> ChooserState:
        """Recompute the view from the loaded collections, filter and sort."""
        records = merge_collections(self._results)
        games = displayed_games(self._results, self.filter, self.sort, self.sorters)
        return ChooserState(
            games=tuple(games),
            total_owned=total_owned(records),
            player_options=get_player_options(records),
            time_options=tuple(get_time_options(records)),
            pending=self._pending,
            loaded=tuple(result.username for result in self._results),
            failed=dict(self._failed),
            filter=self.filter,
            sort=self.sort,
        )

    async def load_collections(
        self,
        usernames: Sequence[str],
        max_age: float = DEFAULT_MAX_AGE,
        concurrent: bool = False,
    ) -> AsyncIterator[ChooserState]:
        """
        Load the collections of `usernames`, yielding a state after each one.

        The first state is yielded before any request. A username that fails
        contributes no games and is listed in `failed`; the others still load.
        When the batch finishes with at least one collection, the names are
        added to the history.

        Args:
            usernames: BGG usernames; empty names are ignored
            max_age: Maximum age of cached collections, 0 to refetch
            concurrent: Fetch all users at once instead of one after another
        """
        names = [name for name in usernames if name]
        self._results = []
        self._failed = {}
        self._pending = len(names)
        logger.info(f"Loading collections for {', '.join(names) or 'nobody'}")
        yield self.state()

        if concurrent:
            tasks = [asyncio.create_task(self._fetch(name, max_age)) for name in names]
            try:
                for next_done in asyncio.as_completed(tasks):
                    self._record(*await next_done)
                    yield self.state()
            finally:
                for task in tasks:
                    task.cancel()
        else:
            for name in names:
                self._record(*await self._fetch(name, max_age))
                yield self.state()

        if self._results and self.history is not None:
            self._remember(names)

    def refresh(self, usernames: Sequence[str], concurrent: bool = False) -> AsyncIterator[ChooserState]:
        """Reload ignoring cached collections."""
        return self.load_collections(usernames, max_age=0, concurrent=concurrent)

    def apply_filter(self, filter_spec: FilterSpec) -> ChooserState:
        if filter_spec != self.filter:
            logger.debug(f"Filter changed to {filter_spec}")
        self.filter = filter_spec
        return self.state()

    def choose_sort(self, name: str) -> ChooserState:
        """Activate a sorter, or flip its direction if it is already active."""
        self.sort = self.sort.choose(name, self.sorters)
        return self.state()

    async def _fetch(self, name: str, max_age: float):
        try:
            return name, await self.client.fetch_collection(name, max_age), None
        except CollectionError as e:
            logger.warning(f"Skipping collection of '{name}': {e}")
            return name, None, e

    def _record(self, name: str, result: Optional[CollectionFetchResult], error: Optional[CollectionError]) -> None:
        self._pending -= 1
        if result is not None:
            self._results.append(result)
        else:
            self._failed[name] = error.kind

    @handle_errors(default_return=None)
    def _remember(self, names: List[str]) -> None:
        self.history.add(names)
