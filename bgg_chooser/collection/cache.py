"""
In-memory freshness cache for fetched collections.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from ..models import CollectionFetchResult


@dataclass(frozen=True)
class CacheEntry:
    result: CollectionFetchResult
    fetched_at: float
    generation: int = 1  # bumped on every store for the same username

    def age(self, now: float) -> float:
        return now - self.fetched_at


class CollectionCache:
    """
    Per-username cache of successful fetches, for the lifetime of the process.

    Keys are the usernames exactly as the caller passed them. Time comes from
    the injected clock so freshness can be tested without waiting.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def get(self, username: str) -> Optional[CacheEntry]:
        return self._entries.get(username)

    def generation(self, username: str) -> int:
        entry = self._entries.get(username)
        return entry.generation if entry is not None else 0

    def put(self, username: str, result: CollectionFetchResult) -> CacheEntry:
        entry = CacheEntry(result=result, fetched_at=self.clock(), generation=self.generation(username) + 1)
        self._entries[username] = entry
        return entry

    def fresh(self, username: str, max_age: float) -> Optional[CollectionFetchResult]:
        """Return the cached result if it is younger than max_age; max_age 0 never hits."""
        entry = self._entries.get(username)
        if entry is not None and max_age > entry.age(self.clock()):
            return entry.result
        return None

    def lock(self, username: str) -> asyncio.Lock:
        """Lock serializing fetches of one username."""
        if username not in self._locks:
            self._locks[username] = asyncio.Lock()
        return self._locks[username]

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, username: str) -> bool:
        return username in self._entries
