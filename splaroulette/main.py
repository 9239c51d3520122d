"""Spla Roulette API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RouletteError to structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Store, catalog client and controller built on startup via the lifespan
    - A failed catalog load or an unusable store never prevents startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from splaroulette.api.dependencies import init_controller
from splaroulette.api.error_handlers import register_error_handlers
from splaroulette.api.routes import draws, filters, health, preferences, roster, state
from splaroulette.config import get_settings
from splaroulette.core.errors import PersistenceError
from splaroulette.infrastructure.catalog_client import CatalogClient
from splaroulette.infrastructure.key_value_store import SqlKeyValueStore
from splaroulette.infrastructure.observability import setup_logging
from splaroulette.services.roulette_controller import RouletteController

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    try:
        store = SqlKeyValueStore(settings.store_url)
    except PersistenceError as e:
        logger.warning(f"Running without persistent store: {e.message}")
        store = None
    client = CatalogClient(settings.catalog_urls, settings.fetch_timeout_seconds)
    controller = RouletteController.from_settings(settings, store, client)
    init_controller(controller)
    await controller.start()
    logger.info("Spla Roulette API started")
    yield
    logger.info("Spla Roulette API shutting down")
    await client.aclose()
    if store is not None:
        store.dispose()


app = FastAPI(
    title="Spla Roulette API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(state.router)
app.include_router(filters.router)
app.include_router(roster.router)
app.include_router(draws.router)
app.include_router(preferences.router)

register_error_handlers(app, settings.locale)
