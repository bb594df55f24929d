import os

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://testserver/api"),
    "token": "test-token",
    "timeout": 5.0,
}

PRESENT_STATUS = "Present"
TREND_WEEKS = 4
PERCENT_PRECISION = 1

DEBUG = False
TESTING = True
