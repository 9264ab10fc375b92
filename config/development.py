import os

API_CONFIG = {
    "base_url": os.getenv("API_BASE", "http://localhost:5000"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "10")),
    "range_start": os.getenv("ATTENDANCE_RANGE_START") or None,
    "range_end": os.getenv("ATTENDANCE_RANGE_END") or None,
    "revert_failed_writes": bool(int(os.getenv("REVERT_FAILED_WRITES", "0"))),
}

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
