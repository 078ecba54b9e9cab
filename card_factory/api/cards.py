"""
Card API endpoints.

Builds themed creatures and spells through the deck factories, and exposes
plain card search and art-version listing.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from card_factory.adapters import CardSource
from card_factory.api.deps import get_app_config, get_card_source
from card_factory.api.schemas import (
    ArtVersionResponse,
    ArtVersionsResponse,
    CardSearchResponse,
    CreateCardRequest,
    CreatureResponse,
    SpellResponse,
)
from card_factory.config import AppConfig, DeckConfig
from card_factory.factories import create_creature, create_spell, get_deck
from card_factory.models import CardRecord, NotFound, TransientError

router = APIRouter(prefix="/api/cards", tags=["cards"])

Source = Annotated[CardSource, Depends(get_card_source)]
Config = Annotated[AppConfig, Depends(get_app_config)]
CardName = Annotated[str, Query(alias="cardName")]


def _require_name(card_name: str, field: str = "cardName") -> str:
    if not card_name or not card_name.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field} is required",
        )
    return card_name.strip()


def _require_deck(config: AppConfig, color: str) -> DeckConfig:
    deck = get_deck(config.decks, color)
    if deck is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown deck color: {color}",
        )
    return deck


@router.post("/creature", response_model=CreatureResponse)
async def build_creature(
    request: CreateCardRequest, source: Source, config: Config
) -> CreatureResponse:
    """Create a creature card using the requested deck's factory."""
    deck = _require_deck(config, request.deck_color)
    name = _require_name(request.card_name)
    creature = await create_creature(source, deck, name)
    return CreatureResponse(
        name=creature.name,
        mana_cost=creature.mana_cost,
        power_toughness=creature.power_toughness,
        keywords=creature.keywords,
        text=creature.text,
        deck_color=request.deck_color,
        image_url=creature.image_url,
    )


@router.post("/spell", response_model=SpellResponse)
async def build_spell(
    request: CreateCardRequest, source: Source, config: Config
) -> SpellResponse:
    """Create a spell card using the requested deck's factory."""
    deck = _require_deck(config, request.deck_color)
    name = _require_name(request.card_name)
    spell = await create_spell(source, deck, name)
    return SpellResponse(
        name=spell.name,
        mana_cost=spell.mana_cost,
        keywords=spell.keywords,
        text=spell.text,
        deck_color=request.deck_color,
        image_url=spell.image_url,
    )


@router.get("/search", response_model=CardSearchResponse)
async def search_card(card_name: CardName, source: Source) -> CardSearchResponse:
    """
    Search for a card by name, bypassing the factories.

    Returns 404 when no card matches and 502 when the card provider could
    not be reached.
    """
    name = _require_name(card_name)
    result = await source.lookup_card(name)

    if isinstance(result, NotFound):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card not found: {name}",
        )
    if isinstance(result, TransientError):
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Card search failed, try again",
        )
    if not isinstance(result, CardRecord):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="cardName is required",
        )

    return CardSearchResponse(
        name=result.name,
        mana_cost=result.mana_cost or "",
        type=result.type_line or "",
        text=result.oracle_text or "",
        power=result.power or "",
        toughness=result.toughness or "",
        colors=sorted(result.colors),
        image_url=result.image_url or "",
    )


@router.get("/art", response_model=ArtVersionsResponse)
async def card_art(card_name: CardName, source: Source) -> ArtVersionsResponse:
    """
    Return all unique art versions for a card name.

    The name should be the canonical one returned by /search. Provider
    failures yield an empty list.
    """
    name = _require_name(card_name)
    versions = await source.lookup_art_versions(name)
    return ArtVersionsResponse(
        card_name=name,
        total_art=len(versions),
        versions=[
            ArtVersionResponse(
                image_url=v.image_url or "",
                art_crop_url=v.art_crop_url or "",
                set_name=v.set_name or "Unknown Set",
                set_code=v.set_code or "",
                collector_number=v.collector_number or "",
                artist=v.artist or "Unknown Artist",
            )
            for v in versions
        ],
    )
