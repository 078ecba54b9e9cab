"""YAML configuration loader and validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from card_factory.adapters import known_sources
from card_factory.scryfall.api import (
    BASE_URL,
    DEFAULT_MAX_PAGES,
    MIN_PAGE_DELAY_MS,
    USER_AGENT,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")


@dataclass
class SourceConfig:
    """Configuration for the card data source."""

    name: str = "scryfall-api"
    base_url: str = BASE_URL
    user_agent: str = USER_AGENT
    timeout_s: float = 10.0
    page_delay_ms: int = MIN_PAGE_DELAY_MS
    max_pages: int = DEFAULT_MAX_PAGES
    image_size: str = "normal"  # "small", "normal", "large", "png"


@dataclass
class DeckConfig:
    """A themed deck: the products one factory builds."""

    id: str  # e.g. "red"
    name: str  # e.g. "Red"
    description: str  # e.g. "Aggressive"
    color: str = "white"  # rich colour used by the CLI
    creature: str = ""  # Default creature name
    spell: str = ""  # Default spell name


@dataclass
class ApiConfig:
    """JSON API server settings."""

    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])


def _default_decks() -> Dict[str, DeckConfig]:
    return {
        "red": DeckConfig(
            id="red",
            name="Red",
            description="Aggressive",
            color="red",
            creature="Goblin Guide",
            spell="Lightning Bolt",
        ),
        "blue": DeckConfig(
            id="blue",
            name="Blue",
            description="Control",
            color="blue",
            creature="Snapcaster Mage",
            spell="Counterspell",
        ),
    }


@dataclass
class AppConfig:
    """Top-level application configuration."""

    source: SourceConfig = field(default_factory=SourceConfig)
    decks: Dict[str, DeckConfig] = field(default_factory=_default_decks)
    api: ApiConfig = field(default_factory=ApiConfig)


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load configuration from a YAML file, falling back to defaults."""
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.info("No config file at %s, using defaults", config_path)
        config = AppConfig()
    else:
        logger.info("Loading config from %s", config_path)
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
        config = _parse_config(raw) if raw else AppConfig()

    _validate_config(config)
    return config


def _parse_config(raw: Dict[str, Any]) -> AppConfig:
    """Parse raw YAML dict into AppConfig."""
    config = AppConfig()

    if "source" in raw:
        src = raw["source"] or {}
        defaults = config.source
        config.source = SourceConfig(
            name=src.get("name", defaults.name),
            base_url=src.get("base_url", defaults.base_url),
            user_agent=src.get("user_agent", defaults.user_agent),
            timeout_s=float(src.get("timeout_s", defaults.timeout_s)),
            page_delay_ms=int(src.get("page_delay_ms", defaults.page_delay_ms)),
            max_pages=int(src.get("max_pages", defaults.max_pages)),
            image_size=src.get("image_size", defaults.image_size),
        )

    if "decks" in raw:
        config.decks = {}
        for deck_id, deck_raw in (raw["decks"] or {}).items():
            deck_raw = deck_raw or {}
            deck_id = str(deck_id).lower()
            config.decks[deck_id] = DeckConfig(
                id=deck_id,
                name=deck_raw.get("name", deck_id.title()),
                description=deck_raw.get("description", ""),
                color=deck_raw.get("color", "white"),
                creature=deck_raw.get("creature", ""),
                spell=deck_raw.get("spell", ""),
            )

    if "api" in raw:
        api = raw["api"] or {}
        config.api = ApiConfig(
            host=api.get("host", config.api.host),
            port=int(api.get("port", config.api.port)),
            cors_origins=list(api.get("cors_origins", config.api.cors_origins)),
        )

    return config


def _validate_config(config: AppConfig) -> None:
    """Validate config and raise on errors."""
    src = config.source
    known = known_sources()
    if src.name not in known:
        raise ValueError(
            f"Config error: unknown source '{src.name}'. Known: {sorted(known)}"
        )
    if src.page_delay_ms < MIN_PAGE_DELAY_MS:
        raise ValueError(
            f"Config error: page_delay_ms must be at least {MIN_PAGE_DELAY_MS}, "
            f"got {src.page_delay_ms}"
        )
    if src.max_pages < 1:
        raise ValueError(f"Config error: max_pages must be positive, got {src.max_pages}")
    if src.timeout_s <= 0:
        raise ValueError(f"Config error: timeout_s must be positive, got {src.timeout_s}")

    if not config.decks:
        raise ValueError("Config error: no decks defined")

    logger.info(
        "Config validated: source=%s, %d decks, api on %s:%d",
        src.name,
        len(config.decks),
        config.api.host,
        config.api.port,
    )
