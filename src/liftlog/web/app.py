"""FastAPI application exposing the workout logging engine."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from .. import __version__
from ..config import configure_logging
from ..db.engine import get_db_path, init_db
from .routers import exercises, workouts

logger = logging.getLogger(__name__)


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()
    db_path = db_path or get_db_path()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler - runs on startup and shutdown."""
        # Startup: make sure the schema exists
        await init_db(db_path)
        logger.info("Serving database %s", db_path)
        yield

    app = FastAPI(
        title="liftlog",
        description="Workout logging and fitness analytics",
        version=__version__,
        lifespan=lifespan,
    )

    # Routers read the database location from app state
    app.state.db_path = db_path

    app.include_router(workouts.router)
    app.include_router(exercises.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
