"""Base protocol for card data sources and the source registry."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Dict, List, Protocol, Type, runtime_checkable

from card_factory.models import ArtVersionRecord, CardLookupResult

if TYPE_CHECKING:
    from card_factory.config import SourceConfig


@runtime_checkable
class CardSource(Protocol):
    """Protocol every card data source must satisfy.

    Sources are selected by name from the YAML config. A source knows how
    to talk to one provider and normalize its output into CardRecord and
    ArtVersionRecord; nothing outside the source sees the wire format.
    """

    @property
    def name(self) -> str:
        """Human-readable source name for logging."""
        ...

    async def lookup_card(self, query: str) -> CardLookupResult:
        """Resolve a free-text card name to one card."""
        ...

    async def lookup_art_versions(self, canonical_name: str) -> List[ArtVersionRecord]:
        """Return every distinct art of a card (possibly empty)."""
        ...

    async def close(self) -> None:
        """Clean up any resources (HTTP clients, etc.)."""
        ...


# source name -> qualified class name
_SOURCE_REGISTRY: Dict[str, str] = {
    "scryfall-api": "card_factory.scryfall.api.ScryfallApiAdapter",
}


def get_source_class(name: str) -> Type[CardSource]:
    """Import and return the source class registered under ``name``."""
    qualified = _SOURCE_REGISTRY.get(name)
    if qualified is None:
        raise ValueError(
            f"Unknown card source '{name}'. Available: {sorted(_SOURCE_REGISTRY)}"
        )
    module_path, class_name = qualified.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def known_sources() -> set[str]:
    """Return the set of registered source names."""
    return set(_SOURCE_REGISTRY.keys())


def create_source(cfg: SourceConfig) -> CardSource:
    """Instantiate the configured card source."""
    cls = get_source_class(cfg.name)
    return cls(
        base_url=cfg.base_url,
        user_agent=cfg.user_agent,
        timeout_s=cfg.timeout_s,
        page_delay_ms=cfg.page_delay_ms,
        max_pages=cfg.max_pages,
        image_size=cfg.image_size,
    )
