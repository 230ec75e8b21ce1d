"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seatwatch import __version__
from seatwatch.api.dependencies import close_tracker, init_settings, init_tracker
from seatwatch.api.models import TicketErrorResponse
from seatwatch.api.routes import layout, tickets
from seatwatch.tracker import TrackerError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from seatwatch.config import Settings

logger = logging.getLogger("seatwatch.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    if app.state.open_tracker:
        init_tracker(settings)
    logger.info(
        "Proxy started (redmine=%s, tracker=%d, pending=%d, approved=%d)",
        settings.redmine_url,
        settings.tracker_id,
        settings.pending_status_id,
        settings.approved_status_id,
    )

    yield
    # Shutdown
    if app.state.open_tracker:
        await close_tracker()


def create_app(settings: Settings, open_tracker: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Validated settings.
        open_tracker: Whether the lifespan opens the tracker client. Tests
            that install a stub tracker pass False.
    """
    app = FastAPI(
        title="SeatWatch API",
        description="Proxy between the classroom dashboard and Redmine",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.open_tracker = open_tracker
    init_settings(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Upstream failures that escape a route still answer with an envelope
    @app.exception_handler(TrackerError)
    async def tracker_error_handler(_request: Request, exc: TrackerError) -> JSONResponse:
        logger.error("Unhandled tracker error: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=TicketErrorResponse(error=str(exc)).model_dump(),
        )

    # Include routers
    app.include_router(tickets.router, prefix="/api")
    app.include_router(layout.router, prefix="/api")

    return app
