"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TREND_WEEKS = 4
DEFAULT_PERCENT_PRECISION = 1
DEFAULT_PRESENT_STATUS = "Present"
DEFAULT_API_TIMEOUT_SECONDS = 10.0
DEFAULT_PAGE_SIZE = 100

NOT_APPLICABLE_LABEL = "N/A"
NO_RECORDS_MESSAGE = "No records to display"
COURSE_PLACEHOLDER = "Course {id}"
WEEK_LABEL = "W{week}"
UNKNOWN_COURSE = "Unknown course"
