import os

from config.base import (  # noqa: F401
    DB_CONFIG,
    LATE_WINDOW_MINUTES,
    ON_TIME_TOLERANCE_MINUTES,
    THRESHOLD_STORE,
    TIMEZONE,
)

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
