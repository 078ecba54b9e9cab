"""FastAPI application for the card factory web frontend."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from card_factory import __version__
from card_factory.adapters import CardSource, create_source
from card_factory.api import cards_router, decks_router, health_router
from card_factory.config import AppConfig, load_config


def create_app(
    config: Optional[AppConfig] = None,
    source: Optional[CardSource] = None,
) -> FastAPI:
    """Build the API app.

    Without ``source`` the lifespan opens the configured card source and
    closes it on shutdown. A source passed in stays owned by the caller.
    """
    app_config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        if source is not None:
            yield
            return
        opened = create_source(app_config.source)
        app.state.card_source = opened
        try:
            yield
        finally:
            await opened.close()

    app = FastAPI(
        title="Card Factory",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = app_config
    if source is not None:
        app.state.card_source = source

    app.include_router(cards_router)
    app.include_router(decks_router)
    app.include_router(health_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.api.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app
