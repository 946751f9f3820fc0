import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "college_portal_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

ATTENDANCE_THRESHOLD = 0.75

ACTIVE_WINDOW_MINUTES = 60
REMINDER_DELAY_MINUTES = 10
REMINDER_WINDOW_MINUTES = 5

ACTIVE_POLL_SECONDS = 60
REMINDER_POLL_SECONDS = 300

HISTORY_LIMIT = 30
