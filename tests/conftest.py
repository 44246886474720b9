"""Root conftest — shared test configuration."""

import os

# Settings are cached on first use, so the environment is fixed before any import of skillswap
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("ADMIN_EMAILS", '["admin@example.com"]')
os.environ.setdefault("LOG_FORMAT", "text")
