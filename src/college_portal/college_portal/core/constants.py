"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_ATTENDANCE_THRESHOLD = 0.75

# Active window is measured from the slot start, not the declared end.
ACTIVE_WINDOW_MINUTES = 60
REMINDER_DELAY_MINUTES = 10
REMINDER_WINDOW_MINUTES = 5

ACTIVE_POLL_SECONDS = 60
REMINDER_POLL_SECONDS = 300

DEFAULT_HISTORY_LIMIT = 30

GOOD_ATTENDANCE_PERCENT = 90
MIN_TARGET_PERCENT = 50
MAX_TARGET_PERCENT = 99
