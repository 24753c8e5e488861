"""
Game Night Analytics API - Main Application

FastAPI application serving leaderboards, sessions and banners.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gamenight_analytics import __version__
from gamenight_analytics.api.dependencies import ClientManager
from gamenight_analytics.api.routes import banners, leaderboard, rounds, sessions
from gamenight_analytics.config import get_settings
from gamenight_analytics.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    settings = get_settings()
    logger.info("Starting Game Night Analytics API v%s", __version__)
    logger.info("Debug mode: %s", settings.debug)
    if settings.rounds_file:
        logger.info("Round source: file %s", settings.rounds_file)
    else:
        logger.info("Round source: %s", settings.records_base_url or "not configured")

    yield

    # Shutdown
    logger.info("Shutting down Game Night Analytics API")
    await ClientManager.close_client()


def create_app() -> FastAPI:
    """Application factory to create the FastAPI app."""
    settings = get_settings()
    setup_logging(settings.log_dir, "DEBUG" if settings.debug else settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.api_title,
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
            "endpoints": {
                "leaderboard": "/api/leaderboard",
                "sessions": "/api/sessions",
                "rounds": "/api/rounds",
                "banners": "/api/banners",
            },
        }

    # Register API routes
    app.include_router(leaderboard.router, prefix="/api/leaderboard", tags=["Leaderboard"])
    app.include_router(sessions.router, prefix="/api/sessions", tags=["Sessions"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["Rounds"])
    app.include_router(banners.router, prefix="/api/banners", tags=["Banners"])

    return app


# Create the application instance
app = create_app()


def run():
    """Run the application (used by the CLI entry point)."""
    settings = get_settings()
    uvicorn.run(
        "gamenight_analytics.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    run()
