"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 1440

DEFAULT_TREND_THRESHOLD_PERCENT = 5.0
DEFAULT_PEAK_DAYS = 5
DEFAULT_REPORT_WORKERS = 1
DEFAULT_REPORT_DAYS = 7

# Display order for weekday distributions (date.weekday() indexes).
WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
