"""
Sorting of collection records by a single active sorter.
"""

from dataclasses import dataclass, replace
from enum import Enum
from functools import cmp_to_key
from typing import Callable, Iterable, List, Optional, Sequence

from ..models import GameRecord

Comparator = Callable[[GameRecord, GameRecord], int]


class SortDirection(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"

    def invert(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


def three_way(lhs, rhs) -> int:
    if lhs == rhs:
        return 0
    return -1 if lhs < rhs else 1


def compare_optional(lhs, rhs, default) -> int:
    """Three-way comparison treating missing values as `default`."""
    return three_way(default if lhs is None else lhs, default if rhs is None else rhs)


def _average_rating(record: GameRecord) -> Optional[float]:
    if record.stats is None or record.stats.rating is None:
        return None
    return record.stats.rating.average


def compare_name(lhs: GameRecord, rhs: GameRecord) -> int:
    return three_way(lhs.name, rhs.name)


def compare_rating(lhs: GameRecord, rhs: GameRecord) -> int:
    return compare_optional(_average_rating(lhs), _average_rating(rhs), 0)


def compare_year(lhs: GameRecord, rhs: GameRecord) -> int:
    return compare_optional(lhs.year_published, rhs.year_published, 0)


@dataclass(frozen=True)
class Sorter:
    name: str
    compare: Comparator
    default_direction: SortDirection = SortDirection.ASCENDING


SORTERS = (
    Sorter("Name", compare_name),
    Sorter("BGG Rating", compare_rating, SortDirection.DESCENDING),
    Sorter("Year Published", compare_year, SortDirection.DESCENDING),
)


@dataclass(frozen=True)
class SortSpec:
    """The active sorter (by position in the sorter list) and its direction."""
    active_index: int = 1
    direction: SortDirection = SortDirection.DESCENDING

    def active(self, sorters: Sequence[Sorter] = SORTERS) -> Sorter:
        if 0 <= self.active_index < len(sorters):
            return sorters[self.active_index]
        return sorters[0]

    def choose(self, name: str, sorters: Sequence[Sorter] = SORTERS) -> "SortSpec":
        """
        Select a sorter by name.

        Choosing the active sorter again flips its direction; choosing another
        one activates it in its default direction.
        """
        for index, sorter in enumerate(sorters):
            if sorter.name == name:
                if index == self.active_index:
                    return replace(self, direction=self.direction.invert())
                return SortSpec(active_index=index, direction=sorter.default_direction)
        raise KeyError(f"Unknown sorter: {name}")


def compare_records(lhs: GameRecord, rhs: GameRecord, sorter: Sorter, direction: SortDirection) -> int:
    result = sorter.compare(lhs, rhs)
    if result == 0 or direction is SortDirection.ASCENDING:
        return result
    return -result


def sort_records(records: Iterable[GameRecord], spec: SortSpec, sorters: Sequence[Sorter] = SORTERS) -> List[GameRecord]:
    """Stable sort by the active sorter; equal records keep their input order."""
    sorter = spec.active(sorters)
    return sorted(records, key=cmp_to_key(lambda a, b: compare_records(a, b, sorter, spec.direction)))


def default_sort_spec(sorters: Sequence[Sorter] = SORTERS) -> SortSpec:
    """Sort by BGG rating, best first, when that sorter exists."""
    for index, sorter in enumerate(sorters):
        if sorter.name == "BGG Rating":
            return SortSpec(active_index=index, direction=SortDirection.DESCENDING)
    return SortSpec(active_index=0, direction=sorters[0].default_direction)
