"""Abstract Factory demo backed by live Scryfall card data."""

__version__ = "0.3.0"
