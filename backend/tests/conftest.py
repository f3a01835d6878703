"""Root conftest — shared test configuration."""

import os

# Tests never sign tokens with a real secret or touch a real database
os.environ.setdefault("JWT_SECRET", "test-signing-secret")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
