"""Conduit API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ConduitError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - TokenService built once from Settings and held on app.state
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - TokenService constructed at import time so dependency overrides in tests
      and the running server see the same immutable config
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import articles, health, profiles, users
from app.config import get_settings
from app.core.tokens import TokenConfig, TokenService
from app.infrastructure import database
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        timeout=settings.database_timeout_seconds,
    )
    logger.info("Conduit API started")
    yield
    await manager.dispose()
    logger.info("Conduit API shutting down")


app = FastAPI(
    title="Conduit API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.state.token_service = TokenService(TokenConfig.from_settings(settings))

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(users.router)
app.include_router(profiles.router)
app.include_router(articles.router)

register_error_handlers(app)
