import os

from config.base import DB_CONFIG, LATE_WINDOW_MINUTES, ON_TIME_TOLERANCE_MINUTES, TIMEZONE  # noqa: F401

DEBUG = False
TESTING = True

THRESHOLD_STORE = os.getenv("THRESHOLD_STORE", "memory")
AUTO_INIT_DB = False
