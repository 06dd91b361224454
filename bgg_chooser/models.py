"""
Shared data models for the BGG Chooser package.

Records parsed from the BGG collection payload are pydantic models; the
payload is loose and optional-heavy, so every numeric field that is missing
or unreadable decodes to None instead of failing the whole document.
"""

import uuid
from dataclasses import dataclass, field
from typing import Annotated, Any, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def _lenient_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _lenient_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _scalar_or_wrapped(parse):
    """Accept `7.5` as well as `{"value": "7.5"}` and return one optional scalar."""
    def validator(value: Any):
        if isinstance(value, dict):
            value = value.get("value")
        return parse(value)
    return validator


def _flag(value: Any) -> int:
    return _lenient_int(value) or 0


OptionalInt = Annotated[Optional[int], BeforeValidator(_lenient_int)]
OptionalFloat = Annotated[Optional[float], BeforeValidator(_lenient_float)]
RatingInt = Annotated[Optional[int], BeforeValidator(_scalar_or_wrapped(_lenient_int))]
RatingFloat = Annotated[Optional[float], BeforeValidator(_scalar_or_wrapped(_lenient_float))]
Flag = Annotated[int, BeforeValidator(_flag)]


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Rank(_Record):
    """One entry of a game's rank list (overall, family ranks...)."""
    type: Optional[str] = None
    id: Optional[str] = None
    name: Optional[str] = None
    friendly_name: Optional[str] = Field(default=None, alias="friendlyname")
    value: OptionalFloat = None
    bayes_average: OptionalFloat = Field(default=None, alias="bayesaverage")


class Rating(_Record):
    """User and community rating statistics."""
    value: RatingFloat = None
    users_rated: RatingInt = Field(default=None, alias="usersrated")
    average: RatingFloat = None
    bayes_average: RatingFloat = Field(default=None, alias="bayesaverage")
    std_dev: RatingFloat = Field(default=None, alias="stddev")
    median: RatingFloat = None
    ranks: Tuple[Rank, ...] = ()

    @field_validator("ranks", mode="before")
    @classmethod
    def _unwrap_ranks(cls, value: Any):
        # <ranks><rank .../><rank .../></ranks> arrives as {"rank": [...]} or {"rank": {...}}
        if value is None or value == "":
            return ()
        if isinstance(value, dict):
            value = value.get("rank", ())
        if isinstance(value, dict):
            value = [value]
        return tuple(value)


class Stats(_Record):
    """Player count, play time and rating statistics for a game."""
    min_players: OptionalInt = Field(default=None, alias="minplayers")
    max_players: OptionalInt = Field(default=None, alias="maxplayers")
    min_play_time: OptionalInt = Field(default=None, alias="minplaytime")
    max_play_time: OptionalInt = Field(default=None, alias="maxplaytime")
    playing_time: OptionalInt = Field(default=None, alias="playingtime")
    num_owned: OptionalInt = Field(default=None, alias="numowned")
    rating: Optional[Rating] = None


class Status(_Record):
    """Ownership flags of a collection entry; each flag is 0 when not set."""
    own: Flag = 0
    prev_owned: Flag = Field(default=0, alias="prevowned")
    for_trade: Flag = Field(default=0, alias="fortrade")
    want: Flag = 0
    want_to_play: Flag = Field(default=0, alias="wanttoplay")
    want_to_buy: Flag = Field(default=0, alias="wanttobuy")
    wishlist: Flag = 0
    preordered: Flag = 0
    last_modified: Optional[str] = Field(default=None, alias="lastmodified")

    @property
    def owned(self) -> bool:
        return self.own == 1


class GameRecord(_Record):
    """One entry of a user's collection."""
    object_id: int = Field(alias="objectid")
    collection_id: int = Field(alias="collid")
    subtype: str
    name: str
    year_published: OptionalInt = Field(default=None, alias="yearpublished")
    image_url: Optional[str] = Field(default=None, alias="image")
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnail")
    stats: Optional[Stats] = None
    status: Optional[Status] = None
    num_plays: Flag = Field(default=0, alias="numplays")

    @property
    def identity(self) -> Tuple[int, int]:
        """Composite key of the physical copy: the game plus the collection entry."""
        return (self.object_id, self.collection_id)

    @property
    def is_owned(self) -> bool:
        return self.status is not None and self.status.owned


@dataclass(frozen=True)
class CollectionFetchResult:
    """Parsed collection of one username, in response order."""
    username: str
    items: Tuple[GameRecord, ...] = field(default_factory=tuple)


@dataclass
class HistoryEntry:
    """One past query: the usernames whose collections were loaded together."""
    id: str
    names: List[str]

    @classmethod
    def new(cls, names: List[str]) -> "HistoryEntry":
        return cls(id=uuid.uuid4().hex, names=list(names))

    def key(self) -> FrozenSet[str]:
        """Entries with the same names, ignoring case and order, are the same query."""
        return frozenset(name.lower() for name in self.names)
