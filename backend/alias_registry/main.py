"""Alias Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AliasRegistryError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema is owned by alembic; create_schema() only runs for SQLite URLs
      so a fresh local checkout works without a migration step
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alias_registry import __version__
from alias_registry.api.error_handlers import register_error_handlers
from alias_registry.api.routes import aliases, health
from alias_registry.config import get_settings
from alias_registry.infrastructure.database import init_db
from alias_registry.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    if settings.database_url.startswith("sqlite"):
        manager.create_schema()
    logger.info("Alias registry API started")
    yield
    manager.dispose()
    logger.info("Alias registry API shutting down")


app = FastAPI(
    title="Alias Registry API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(aliases.router)

register_error_handlers(app)
