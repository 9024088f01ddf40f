"""Launchpad API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LaunchpadError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Session manager, Store and UserAPI built once in the lifespan and kept on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory so tests can build an app and inject their own UserAPI
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from launchpad.api.error_handlers import register_error_handlers
from launchpad.api.routes import health, trips, users
from launchpad.config import get_settings
from launchpad.infrastructure.database import DatabaseSessionManager
from launchpad.infrastructure.observability import setup_logging
from launchpad.infrastructure.store import Store
from launchpad.services.user_api import UserAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.db_manager = db_manager
    app.state.user_api = UserAPI(
        Store(db_manager), max_concurrency=settings.booking_max_concurrency,
    )
    logger.info("Launchpad API started")
    yield
    logger.info("Launchpad API shutting down")
    await db_manager.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Launchpad API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(trips.router)
    register_error_handlers(app)
    return app


app = create_app()
