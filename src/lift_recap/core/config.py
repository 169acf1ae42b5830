"""
Configuration constants for the recap engine.

All adjustable parameters are centralized here for easy tuning.
"""

from datetime import time
from typing import Final

# =============================================================================
# UNITS
# =============================================================================

DEFAULT_WEIGHT_UNIT: Final[str] = "lbs"  # Used when a record carries no unit
KG_PER_LB: Final[float] = 0.453592
CONVERSION_DECIMALS: Final[int] = 1  # Converted weights are rounded to 0.1

# =============================================================================
# CALENDAR
# =============================================================================

END_OF_DAY: Final[time] = time(23, 59, 59, 999000)  # Last millisecond of a day
DAYS_PER_WEEK: Final[int] = 7

MONTH_NAMES: Final[tuple[str, ...]] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

YEAR_SUBTITLE: Final[str] = "Year in Review"

# =============================================================================
# RESULT SIZES
# =============================================================================

TOP_EXERCISES_LIMIT: Final[int] = 5
STRENGTH_PROGRESS_LIMIT: Final[int] = 4

# =============================================================================
# AVERAGES
# =============================================================================

# week: workouts per day; month and year: workouts per week
AVERAGE_DIVISORS: Final[dict[str, int]] = {
    "week": 7,
    "month": 4,
    "year": 52,
}
AVERAGE_DECIMALS: Final[int] = 1
