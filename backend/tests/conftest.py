"""Root conftest — shared test configuration."""

import os

# Tests never touch a real database or a deployment's role map
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("ROLE_ASSIGNMENTS", "{}")
