"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE_OF_DAY = MINUTES_PER_DAY - 1

# Exact identity of the morning break; only this window triggers the start shift.
MORNING_BREAK_START = "06:00"
MORNING_BREAK_END = "08:30"

# Paid attendance is not counted before this time when the policy is on.
ATTENDANCE_COUNT_START = "08:30"

DEFAULT_TIMEZONE = "Asia/Tokyo"
DEFAULT_MISMATCH_THRESHOLD_MINUTES = 60
DEFAULT_EXCESSIVE_WORK_THRESHOLD_MINUTES = 60
DEFAULT_MERGE_GAP_MINUTES = 1
DEFAULT_SCAN_MAX_WORKERS = 1

ISSUE_SCAN_DAYS = 4
EXCESSIVE_WORK_BUSINESS_DAYS = 3

RECALCULATION_ERROR_DETAIL_LIMIT = 10
