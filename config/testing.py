API_CONFIG = {
    "base_url": "http://testserver",
    "timeout": 5.0,
    "range_start": None,
    "range_end": None,
    "revert_failed_writes": False,
}

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
