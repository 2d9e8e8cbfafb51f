"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from delve.api.dependencies import set_engine_manager
from delve.api.engine_manager import EngineManager
from delve.api.routes import api_router
from delve.config import SimulationConfig
from delve.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started (seed=%d).", _config.world_seed)
        yield
        manager.stop()
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Delve Dungeon Engine",
        description=(
            "Deterministic turn-tick dungeon crawler kernel.\n\n"
            "## API Groups\n\n"
            "- **Map** — Static tile layout of the current level\n"
            "- **State** — Player, visible monsters, fog-of-war layers and messages\n"
            "- **Input** — Queue player movement (bump into a monster to attack)\n"
            "- **Control** — Simulation lifecycle: start, pause, resume, step, reset\n"
            "- **Config** — Read-only simulation configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Map", "description": "Tile layout and room rectangles. Changes only on reset."},
            {"name": "State", "description": "Per-tick state polled by the renderer."},
            {"name": "Input", "description": "Player movement intents, consumed one per tick."},
            {"name": "Control", "description": "Simulation lifecycle controls: start, pause, resume, single-step, and reset."},
            {"name": "Config", "description": "Read-only simulation configuration parameters."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
