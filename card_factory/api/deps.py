"""Request dependencies shared by the API routers."""

from fastapi import Request

from card_factory.adapters import CardSource
from card_factory.config import AppConfig


def get_card_source(request: Request) -> CardSource:
    """Return the card source opened by the application lifespan."""
    return request.app.state.card_source


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config
