"""Deck theme endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from card_factory.api.deps import get_app_config
from card_factory.api.schemas import DeckResponse
from card_factory.config import AppConfig

router = APIRouter(prefix="/api/decks", tags=["decks"])


@router.get("", response_model=list[DeckResponse])
async def list_decks(
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> list[DeckResponse]:
    """Return the available deck types (factory options)."""
    return [
        DeckResponse(id=deck.id, name=deck.name, description=deck.description)
        for deck in config.decks.values()
    ]
