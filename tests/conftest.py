"""Shared fixtures: canned Scryfall payloads and an in-memory card source."""

from typing import Dict, List

import pytest

from card_factory.models import ArtVersionRecord, CardLookupResult, CardRecord, InvalidQuery, NotFound


COUNTERSPELL = {
    "object": "card",
    "id": "0df55e3f-14de-46ef-b6b1-616618724d9e",
    "name": "Counterspell",
    "mana_cost": "{U}{U}",
    "type_line": "Instant",
    "oracle_text": "Counter target spell.",
    "colors": ["U"],
    "set": "mh2",
    "set_name": "Modern Horizons 2",
    "collector_number": "267",
    "artist": "Zack Stella",
    "image_uris": {
        "small": "https://cards.scryfall.io/small/front/counterspell.jpg",
        "normal": "https://cards.scryfall.io/normal/front/counterspell.jpg",
        "large": "https://cards.scryfall.io/large/front/counterspell.jpg",
        "art_crop": "https://cards.scryfall.io/art_crop/front/counterspell.jpg",
    },
}

GOBLIN_GUIDE = {
    "object": "card",
    "name": "Goblin Guide",
    "mana_cost": "{R}",
    "type_line": "Creature — Goblin Scout",
    "oracle_text": "Haste\nWhenever Goblin Guide attacks, defending player reveals the top card of their library.",
    "power": "2",
    "toughness": "2",
    "colors": ["R"],
    "image_uris": {"normal": "https://cards.scryfall.io/normal/front/goblin-guide.jpg"},
}

NOT_FOUND_ERROR = {
    "object": "error",
    "code": "not_found",
    "status": 404,
    "details": "No cards found matching “xyzzy”",
}


def print_entry(set_code: str, number: str, image: bool = True) -> dict:
    """One print as it appears in a /cards/search page."""
    entry = {
        "object": "card",
        "name": "Lightning Bolt",
        "set": set_code,
        "set_name": f"Set {set_code.upper()}",
        "collector_number": number,
        "artist": "Christopher Moeller",
    }
    if image:
        entry["image_uris"] = {
            "normal": f"https://cards.scryfall.io/normal/{set_code}/{number}.jpg",
            "art_crop": f"https://cards.scryfall.io/art_crop/{set_code}/{number}.jpg",
        }
    return entry


class FakeCardSource:
    """In-memory CardSource keyed by lower-cased query."""

    def __init__(
        self,
        cards: Dict[str, CardLookupResult],
        art: Dict[str, List[ArtVersionRecord]] | None = None,
    ) -> None:
        self.cards = {k.lower(): v for k, v in cards.items()}
        self.art = art or {}
        self.card_queries: List[str] = []
        self.art_queries: List[str] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    async def lookup_card(self, query: str) -> CardLookupResult:
        self.card_queries.append(query)
        if not query.strip():
            return InvalidQuery(query=query)
        return self.cards.get(query.lower(), NotFound(query=query))

    async def lookup_art_versions(self, canonical_name: str) -> List[ArtVersionRecord]:
        self.art_queries.append(canonical_name)
        return self.art.get(canonical_name, [])

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_source():
    counterspell = CardRecord(
        name="Counterspell",
        mana_cost="{U}{U}",
        type_line="Instant",
        oracle_text="Counter target spell.",
        colors=frozenset({"U"}),
        image_url="https://cards.scryfall.io/normal/front/counterspell.jpg",
    )
    goblin_guide = CardRecord(
        name="Goblin Guide",
        mana_cost="{R}",
        type_line="Creature — Goblin Scout",
        oracle_text="Haste",
        power="2",
        toughness="2",
        colors=frozenset({"R"}),
        image_url="https://cards.scryfall.io/normal/front/goblin-guide.jpg",
    )
    return FakeCardSource(
        cards={
            "counterspell": counterspell,
            "counterspel": counterspell,
            "goblin guide": goblin_guide,
        },
        art={
            "Counterspell": [
                ArtVersionRecord(
                    image_url="https://cards.scryfall.io/normal/front/cs-1.jpg",
                    art_crop_url="https://cards.scryfall.io/art_crop/front/cs-1.jpg",
                    set_name="Alpha",
                    set_code="lea",
                    collector_number="54",
                    artist="Mark Poole",
                ),
                ArtVersionRecord(image_url="https://cards.scryfall.io/normal/front/cs-2.jpg"),
            ],
        },
    )
