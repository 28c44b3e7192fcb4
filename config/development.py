import os

from config.base import (  # noqa: F401
    DB_CONFIG,
    LATE_WINDOW_MINUTES,
    ON_TIME_TOLERANCE_MINUTES,
    THRESHOLD_STORE,
    TIMEZONE,
)

DEBUG = True

# Apply database/schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
