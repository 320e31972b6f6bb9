"""Application Context — the process-wide handles, created once per lifespan.

Invariants:
    - Exactly one AppContext per running app, stored on app.state.context
    - close() disposes the engine; nothing else holds a connection pool

Design Decisions:
    - Explicit context object instead of module-level singletons: tests build
      one around an in-memory engine and attach it to the app
"""

from dataclasses import dataclass

from club_ledger.config import Settings
from club_ledger.infrastructure.database import DatabaseSessionManager


@dataclass
class AppContext:
    settings: Settings
    db: DatabaseSessionManager

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(
            settings=settings,
            db=DatabaseSessionManager(
                settings.database_url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
            ),
        )

    async def start(self) -> None:
        if self.settings.database_create_schema:
            await self.db.create_schema()

    async def close(self) -> None:
        await self.db.dispose()
