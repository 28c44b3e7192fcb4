import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "activity_attendance"),
}

# Check-in windows around the slot start/end, in minutes.
ON_TIME_TOLERANCE_MINUTES = int(os.getenv("ON_TIME_TOLERANCE_MINUTES", "15"))
LATE_WINDOW_MINUTES = int(os.getenv("LATE_WINDOW_MINUTES", "30"))

# mysql | memory
THRESHOLD_STORE = os.getenv("THRESHOLD_STORE", "mysql")

# IANA zone of slot clock times; timestamps stored as UTC are read in this zone.
TIMEZONE = os.getenv("TIMEZONE", "Asia/Ho_Chi_Minh")
