"""FastAPI backend for the Bodegoes restaurant assistant.

This module only wires things together.  Business logic lives in
``application.use_cases`` and never imports FastAPI.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from bodegoes_assistant import __version__
from bodegoes_assistant.application.use_cases import (
    AssistantGateway,
    RestaurantInfoService,
    SessionService,
)
from bodegoes_assistant.config import Settings, get_settings
from bodegoes_assistant.infrastructure.assistant_agent import (
    AssistantAgentClient,
    create_assistant_agent,
)
from bodegoes_assistant.infrastructure.chat_store import SQLiteChatStore
from bodegoes_assistant.infrastructure.places_client import GooglePlacesClient
from bodegoes_assistant.logging_config import setup_logging
from bodegoes_assistant.presentation.routes import chat, restaurant
from bodegoes_assistant.telemetry import setup_telemetry

# ---------------------------------------------------------------------------
# Lifespan: initialise shared resources once at startup
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up and tear down services around the application lifetime."""
    settings: Settings = app.state.settings
    settings.validate_runtime()

    store = SQLiteChatStore(db_path=settings.chat_db_path)
    store.connect()

    agent = create_assistant_agent(settings, instrument=app.state.instrumentation)
    places = GooglePlacesClient(
        api_key=settings.google_places_api_key,
        timeout=settings.places_timeout_seconds,
    )

    app.state.store = store
    app.state.sessions = SessionService(store)
    app.state.assistant = AssistantGateway(store, AssistantAgentClient(agent))
    app.state.restaurant = RestaurantInfoService(places, settings.restaurant_place_id)

    logger.info("Application startup complete")
    yield

    store.close()
    logger.info("Application shutdown complete")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI app around a single ``Settings`` instance."""
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, json=settings.log_json)

    app = FastAPI(
        title="Bodegoes Restaurant Assistant",
        description="Chat with the Bodegoes assistant and check opening hours.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router)
    app.include_router(restaurant.router)

    # read by the lifespan when the agent is built
    app.state.instrumentation = setup_telemetry(app, settings)
    return app


app = create_app()


def run() -> None:
    """Console entrypoint: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("bodegoes_assistant.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
