"""
Public request and response models.

Field names are camelCase on the wire; the web frontend depends on them.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeckResponse(CamelModel):
    """One deck theme (factory option)."""

    id: str
    name: str
    description: str


class CreateCardRequest(CamelModel):
    """Body for the creature and spell endpoints."""

    deck_color: str
    card_name: str


class CreatureResponse(CamelModel):
    name: str = ""
    mana_cost: str = ""
    power_toughness: str = ""
    keywords: str = ""
    text: str = ""
    deck_color: str = ""
    image_url: str = ""


class SpellResponse(CamelModel):
    name: str = ""
    mana_cost: str = ""
    keywords: str = ""
    text: str = ""
    deck_color: str = ""
    image_url: str = ""


class CardSearchResponse(CamelModel):
    """A card found by name, outside any deck."""

    name: str = ""
    mana_cost: str = ""
    type: str = ""
    text: str = ""
    power: str = ""
    toughness: str = ""
    colors: list[str] = Field(default_factory=list)
    image_url: str = ""


class ArtVersionResponse(CamelModel):
    image_url: str = ""
    art_crop_url: str = ""
    set_name: str = "Unknown Set"
    set_code: str = ""
    collector_number: str = ""
    artist: str = "Unknown Artist"


class ArtVersionsResponse(CamelModel):
    """All unique art versions for a card."""

    card_name: str
    total_art: int
    versions: list[ArtVersionResponse] = Field(default_factory=list)
