"""Tests for the card source registry."""

import pytest

from card_factory.adapters import CardSource, create_source, get_source_class, known_sources
from card_factory.config import SourceConfig
from card_factory.scryfall.api import ScryfallApiAdapter


def test_known_sources():
    assert known_sources() == {"scryfall-api"}


def test_get_source_class():
    assert get_source_class("scryfall-api") is ScryfallApiAdapter


def test_get_source_class_unknown():
    with pytest.raises(ValueError, match="Unknown card source"):
        get_source_class("gatherer")


async def test_create_source_applies_config():
    source = create_source(SourceConfig(page_delay_ms=250, max_pages=3, image_size="large"))
    assert isinstance(source, ScryfallApiAdapter)
    assert isinstance(source, CardSource)
    assert source._page_delay == 0.25
    assert source._max_pages == 3
    await source.close()


def test_fake_source_satisfies_protocol(fake_source):
    assert isinstance(fake_source, CardSource)
