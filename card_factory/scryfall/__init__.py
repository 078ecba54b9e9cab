"""Scryfall card data source."""
