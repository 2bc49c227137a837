"""Values shared by every environment module."""

import os


def env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def db_config(default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": env_int("DB_PORT", 3306),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "workshop_ops"),
    }


# Local zone that work-record instants are rendered in.
TIMEZONE = os.getenv("TIMEZONE", "Asia/Tokyo")

# |work - attendance| above this is under_report / over_report.
MISMATCH_THRESHOLD_MINUTES = env_int("MISMATCH_THRESHOLD_MINUTES", 60)
# work - attendance above this is excessive work.
EXCESSIVE_WORK_THRESHOLD_MINUTES = env_int("EXCESSIVE_WORK_THRESHOLD_MINUTES", 60)
# Sessions separated by at most this many minutes count as one block.
MERGE_GAP_MINUTES = env_int("MERGE_GAP_MINUTES", 1)
SCAN_MAX_WORKERS = env_int("SCAN_MAX_WORKERS", 1)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
