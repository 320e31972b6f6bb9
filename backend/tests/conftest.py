"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch a real database or a deployment token
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ADMIN_TOKEN", "")
os.environ.setdefault("LOG_FORMAT", "text")
