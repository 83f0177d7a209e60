"""Hide COD API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map HideCodError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hidecod.api.error_handlers import register_error_handlers
from hidecod.infrastructure.observability import setup_logging
from hidecod.config import get_settings
from hidecod.api.routes import (
    cities, function_run, health, payment_customizations,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        "Hide COD API started",
        extra={"shop": settings.shopify_shop_domain or None},
    )
    yield
    logger.info("Hide COD API shutting down")


app = FastAPI(
    title="Hide COD API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(function_run.router)
app.include_router(payment_customizations.router)
app.include_router(cities.router)

register_error_handlers(app)
