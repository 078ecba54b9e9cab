"""Card records and lookup outcomes.

Records are immutable snapshots of one successful provider response. Lookup
operations return one of the outcome values below instead of raising, so
callers branch on the result type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Union


@dataclass(frozen=True)
class CardRecord:
    """A single resolved card."""

    name: str  # Canonical name, may differ from the query
    mana_cost: Optional[str] = None  # e.g. "{1}{U}{U}"
    type_line: Optional[str] = None
    oracle_text: Optional[str] = None
    power: Optional[str] = None  # String: can be *, X, 1+*, etc.
    toughness: Optional[str] = None
    colors: FrozenSet[str] = field(default_factory=frozenset)  # "W", "U", "B", "R", "G"
    image_url: Optional[str] = None


@dataclass(frozen=True)
class ArtVersionRecord:
    """One distinct printed art of a card."""

    image_url: Optional[str] = None
    art_crop_url: Optional[str] = None
    set_name: Optional[str] = None
    set_code: Optional[str] = None
    collector_number: Optional[str] = None
    artist: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_url or self.art_crop_url)


@dataclass(frozen=True)
class NotFound:
    """The provider reported no match for the query."""

    query: str
    details: str = ""
    ambiguous: bool = False  # Fuzzy query matched too many cards


@dataclass(frozen=True)
class TransientError:
    """Network, timeout, HTTP or decoding failure. Safe to retry."""

    query: str
    message: str


@dataclass(frozen=True)
class InvalidQuery:
    """Blank query rejected before any request was made."""

    query: str


CardLookupResult = Union[CardRecord, NotFound, TransientError, InvalidQuery]
