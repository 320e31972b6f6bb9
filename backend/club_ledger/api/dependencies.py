"""Request Dependencies — context, database session, store and privilege.

Invariants:
    - The AppContext comes from app.state, set by the lifespan (or a test fixture)
    - One AsyncSession per request; the store never outlives it
    - Privilege is true when no admin token is configured, or when the
      X-Admin-Token header matches it exactly

Design Decisions:
    - get_db is the single override point for tests, mirroring how the routes
      reach the database in production
"""

import hmac
from typing import AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from club_ledger.config import Settings, get_settings
from club_ledger.infrastructure.app_context import AppContext
from club_ledger.infrastructure.ledger_store import SqlLedgerStore


def get_context(request: Request) -> AppContext:
    context = getattr(request.app.state, "context", None)
    if context is None:
        raise RuntimeError("Application context not initialized")
    return context


async def get_db(
    context: AppContext = Depends(get_context),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with context.db.session() as session:
        yield session


def get_store(db: AsyncSession = Depends(get_db)) -> SqlLedgerStore:
    return SqlLedgerStore(db)


def is_privileged(
    x_admin_token: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> bool:
    if not settings.admin_token:
        return True
    if x_admin_token is None:
        return False
    return hmac.compare_digest(x_admin_token, settings.admin_token)
