"""Root pytest configuration for the GlobeTrotter backend.

Settings are read from the environment on first import, so test defaults
must be in place before ``backend.app`` is imported.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
# External lookups use the in-process cache unless a test opts into Redis
os.environ.pop("REDIS_URL", None)
