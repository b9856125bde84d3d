# src/avatar_arena/main.py
"""Main entry point for the Avatar Arena application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from avatar_arena.api.v1 import (
    avatars_router,
    leaderboard_router,
    scripts_router,
    submissions_router,
    system_router,
    votes_router,
)
from avatar_arena.core.errors import register_exception_handlers
from avatar_arena.core.logging import configure_logging
from avatar_arena.core.settings import Settings
from avatar_arena.core.settings import settings as default_settings
from avatar_arena.db.session import Database
from avatar_arena.services import DemoStore, HeyGenClient
from avatar_arena.services.heygen import HeyGenConfig
from avatar_arena.services.leaderboard import resolve_aggregation_mode

logger = logging.getLogger(__name__)

DESCRIPTION = "Anonymous swipe voting for AI-generated avatar videos"


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application.

    The database, demo store and video-generation client are created on
    startup and released on shutdown; handlers reach them via ``app.state``.
    Pass ``database`` to reuse an existing engine instead of building one
    from ``DATABASE_URL``.
    """
    settings = settings or default_settings
    app = FastAPI(title="Avatar Arena API", description=DESCRIPTION, version=settings.app_version)
    app.state.settings = settings

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add GZip middleware for compression
    app.add_middleware(GZipMiddleware)

    register_exception_handlers(app)

    # Include API routers
    app.include_router(avatars_router, prefix="/api/v1")
    app.include_router(leaderboard_router, prefix="/api/v1")
    app.include_router(votes_router, prefix="/api/v1")
    app.include_router(submissions_router, prefix="/api/v1")
    app.include_router(scripts_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")

    @app.on_event("startup")
    async def on_startup() -> None:
        configure_logging(settings)
        db = database
        if db is None and settings.database_url:
            db = Database(settings.database_url, echo=settings.sql_debug)
        app.state.database = db
        app.state.demo_store = DemoStore()
        app.state.heygen_client = HeyGenClient(HeyGenConfig.from_settings(settings))
        app.state.aggregation_mode = resolve_aggregation_mode(settings, db)
        if db is None:
            logger.info("DATABASE_URL not set; serving demo avatars from memory")
        else:
            logger.info("Leaderboard aggregation path: %s", app.state.aggregation_mode.value)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        await app.state.heygen_client.close()
        db: Database | None = app.state.database
        if db is not None and database is None:
            db.dispose()

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint with basic information about the API."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": DESCRIPTION,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("avatar_arena.main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
