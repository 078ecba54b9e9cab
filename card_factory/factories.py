"""Deck factories: themed creature and spell products.

A deck theme is plain configuration. ``get_deck`` picks one by colour and
``create_creature`` / ``create_spell`` fetch card data through a CardSource
before building the product, so product construction itself never touches
the network.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from card_factory.adapters import CardSource
from card_factory.config import DeckConfig
from card_factory.models import CardLookupResult, CardRecord, TransientError

logger = logging.getLogger(__name__)

CREATURE_KEYWORDS = (
    "Haste", "Flying", "First strike", "Double strike", "Deathtouch",
    "Trample", "Vigilance", "Lifelink", "Menace", "Reach",
)

SPELL_KEYWORDS = ("Instant", "Sorcery", "Flash", "Split second", "Storm")

NOT_FOUND_TEXT = "Card not found in database"
NO_TEXT = "No card text available"


def get_deck(decks: Dict[str, DeckConfig], color: str) -> Optional[DeckConfig]:
    """Return the deck for ``color`` (case-insensitive), or None."""
    if not color:
        return None
    return decks.get(color.strip().lower())


@dataclass(frozen=True)
class Creature:
    """A creature card built by a deck factory."""

    name: str
    deck_color: str
    mana_cost: str = "N/A"
    power: str = "?"
    toughness: str = "?"
    text: str = ""
    type_line: str = ""
    image_url: str = ""
    found: bool = True

    @property
    def power_toughness(self) -> str:
        return f"{self.power}/{self.toughness}"

    @property
    def keywords(self) -> str:
        if not self.found or not self.text:
            return "None"
        text = self.text.lower()
        found = [kw for kw in CREATURE_KEYWORDS if kw.lower() in text]
        return ", ".join(found) if found else "None"

    @classmethod
    def from_lookup(cls, query: str, deck: DeckConfig, result: CardLookupResult) -> "Creature":
        fields = _product_fields(query, result)
        return cls(deck_color=deck.id, **fields)


@dataclass(frozen=True)
class Spell:
    """A spell card built by a deck factory."""

    name: str
    deck_color: str
    mana_cost: str = "N/A"
    text: str = ""
    type_line: str = "Unknown"
    image_url: str = ""
    found: bool = True

    @property
    def keywords(self) -> str:
        """Spell speed and mechanics found in the text or type line.

        Falls back to the type line when nothing matches.
        """
        if not self.found or not self.text:
            return self.type_line
        haystack = f"{self.text} {self.type_line}".lower()
        found = [kw for kw in SPELL_KEYWORDS if kw.lower() in haystack]
        return ", ".join(found) if found else self.type_line

    @classmethod
    def from_lookup(cls, query: str, deck: DeckConfig, result: CardLookupResult) -> "Spell":
        fields = _product_fields(query, result)
        # Spells have no body
        fields.pop("power", None)
        fields.pop("toughness", None)
        fields["type_line"] = fields.get("type_line") or "Unknown"
        return cls(deck_color=deck.id, **fields)


async def create_creature(source: CardSource, deck: DeckConfig, card_name: str) -> Creature:
    """Look up ``card_name`` and build the deck's creature."""
    result = await source.lookup_card(card_name)
    return Creature.from_lookup(card_name, deck, result)


async def create_spell(source: CardSource, deck: DeckConfig, card_name: str) -> Spell:
    """Look up ``card_name`` and build the deck's spell."""
    result = await source.lookup_card(card_name)
    return Spell.from_lookup(card_name, deck, result)


async def create_pair(
    source: CardSource, deck: DeckConfig, creature_name: str, spell_name: str
) -> Tuple[Creature, Spell]:
    """Build a deck's creature and spell concurrently."""
    creature, spell = await asyncio.gather(
        create_creature(source, deck, creature_name),
        create_spell(source, deck, spell_name),
    )
    return creature, spell


def _product_fields(query: str, result: CardLookupResult) -> dict:
    if isinstance(result, CardRecord):
        return {
            "name": result.name,
            "mana_cost": "N/A" if result.mana_cost is None else result.mana_cost,
            "power": result.power or "?",
            "toughness": result.toughness or "?",
            "text": result.oracle_text or NO_TEXT,
            "type_line": result.type_line or "",
            "image_url": result.image_url or "",
        }
    if isinstance(result, TransientError):
        logger.warning("Lookup for %r failed: %s", query, result.message)
        text = f"Error fetching card: {result.message}"
    else:
        text = NOT_FOUND_TEXT
    return {"name": query, "text": text, "found": False}
