import os

API_CONFIG = {
    "base_url": os.getenv("API_BASE", "https://attendance-backend-7m9r.onrender.com"),
    "timeout": float(os.getenv("REQUEST_TIMEOUT", "15")),
    "range_start": os.getenv("ATTENDANCE_RANGE_START") or None,
    "range_end": os.getenv("ATTENDANCE_RANGE_END") or None,
    "revert_failed_writes": bool(int(os.getenv("REVERT_FAILED_WRITES", "0"))),
}

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
