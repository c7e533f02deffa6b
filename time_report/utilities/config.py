"""Configuration constants and settings for the time report system."""
import os

# ============================================================================
# CALENDAR CONFIGURATION
# ============================================================================

# 1973-01-01 is a Monday, so day number 0 is a Monday and weeks run MON..SUN
MIN_YEAR = 1973
MAX_YEAR = 2300

DAY_ABBREVIATIONS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

LONG_MONTHS = {1, 3, 5, 7, 8, 10, 12}
SHORT_MONTHS = {4, 6, 9, 11}

# ============================================================================
# LEDGER FILE FORMAT
# ============================================================================

END_MARKER = "END"
COMMENT_MARKER = "--"

# ============================================================================
# BUSINESS RULES
# ============================================================================

# Partial increments are never billed
BILLING_INCREMENT_MINUTES = 15

# Expected work for each weekday that has an entry
STANDARD_DAY_MINUTES = 8 * 60

# ============================================================================
# REPORT LAYOUT
# ============================================================================

COLUMN_PAD = 3
LABEL_PAD = 4
GRAND_TOTAL_LABEL_PAD = 2
DAY_HOUR_WIDTH = 2
TOTAL_HOUR_WIDTH = 3

DAY_HEADER = "     MON     TUE     WED     THU     FRI     SAT     SUN"
DATES_TRAILER = "   TOTALS  REPORT"

# ============================================================================
# APPEND CONFIGURATION
# ============================================================================

RECENT_PROJECT_DAYS = 30
RECENT_PROJECT_LIMIT = 5
TEMP_FILE_PREFIX = "_time_report_"

# ============================================================================
# COMMAND LINE CONFIGURATION
# ============================================================================

DEFAULT_LEDGER_FILE = os.getenv("TIME_REPORT_FILE")

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_LEVEL = "WARNING"
