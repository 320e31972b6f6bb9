"""Club Ledger API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LedgerError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - AppContext created on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Handlers live in api/error_handlers.py; this module only wires things together
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from club_ledger.api.error_handlers import register_error_handlers
from club_ledger.api.routes import health, ledger, members, records, stats, suggestions
from club_ledger.config import Settings, get_settings
from club_ledger.infrastructure.app_context import AppContext
from club_ledger.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def warn_if_open_access(settings: Settings) -> bool:
    """Log a warning when no admin token is configured. Returns True if open."""
    if settings.admin_token:
        return False
    logger.warning(
        "ADMIN_TOKEN is not set: every caller may edit the ledger and roster",
    )
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    warn_if_open_access(settings)
    context = AppContext.from_settings(settings)
    await context.start()
    app.state.context = context
    logger.info("Club Ledger API started")
    yield
    logger.info("Club Ledger API shutting down")
    await context.close()


app = FastAPI(
    title="Club Ledger API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(ledger.router)
app.include_router(stats.router)
app.include_router(members.router)
app.include_router(records.router)
app.include_router(suggestions.router)

register_error_handlers(app)
