"""Zakat Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ZakatLedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; main only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zakat_ledger import __version__
from zakat_ledger.api.error_handlers import register_error_handlers
from zakat_ledger.api.routes import (
    beneficiaries, categories, distributions, donors, health, programs,
    receipts, reports, users,
)
from zakat_ledger.config import get_settings
from zakat_ledger.infrastructure.database import init_db
from zakat_ledger.infrastructure.observability import setup_logging

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
        timeout_seconds=settings.database_timeout_seconds,
    )
    logger.info("Zakat Ledger API started")
    yield
    logger.info("Zakat Ledger API shutting down")
    await manager.dispose()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Zakat Ledger API", version=__version__, lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for module in (
        health, donors, categories, beneficiaries, programs,
        receipts, distributions, reports, users,
    ):
        app.include_router(module.router)

    register_error_handlers(app)
    return app


app = create_app()
