import os

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:8080/api"),
    "token": os.getenv("API_TOKEN") or None,
    "timeout": float(os.getenv("API_TIMEOUT", "10")),
}

# Reporting rules
PRESENT_STATUS = os.getenv("PRESENT_STATUS", "Present")
TREND_WEEKS = int(os.getenv("TREND_WEEKS", "4"))
PERCENT_PRECISION = int(os.getenv("PERCENT_PRECISION", "1"))

DEBUG = True
