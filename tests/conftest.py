"""Root conftest — shared test configuration."""

import os

# Tests never talk to a real database or identity provider
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-for-ledger-tokens-0123456789")
os.environ.setdefault("LOG_FORMAT", "text")
