"""
lift-recap: weekly, monthly and yearly training recaps.

Public entry points::

    from lift_recap import calculate_recap_stats, get_previous_period
"""

from .core.models import RecapStats
from .core.periods import can_go_next, get_next_period, get_previous_period, resolve_period
from .core.recap import (
    build_recap_stats,
    calculate_recap_stats,
    calculate_yearly_stats,
    get_available_years,
)
from .core.units import convert_weight

__version__ = "0.1.0"

__all__ = [
    "RecapStats",
    "build_recap_stats",
    "calculate_recap_stats",
    "calculate_yearly_stats",
    "can_go_next",
    "convert_weight",
    "get_available_years",
    "get_next_period",
    "get_previous_period",
    "resolve_period",
]
