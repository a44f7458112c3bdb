"""Settings for the test suite: in-memory SQLite and a throwaway secret."""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")
os.environ.setdefault("DEBUG", "False")

from config.settings import *  # noqa: E402,F401,F403
