"""
Weight unit conversion.

All recap figures are produced in the caller's preferred unit; every
per-record weight passes through convert_weight before it is aggregated.
"""

import math

from .config import CONVERSION_DECIMALS, KG_PER_LB


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert a weight between lbs and kg.

    Identity when the units match; otherwise the result is rounded to
    one decimal place.

    Args:
        value: Weight in from_unit
        from_unit: "lbs" or "kg"
        to_unit: "lbs" or "kg"

    Returns:
        Weight in to_unit
    """
    if from_unit == to_unit:
        return value
    if from_unit == "lbs" and to_unit == "kg":
        return round(value * KG_PER_LB, CONVERSION_DECIMALS)
    if from_unit == "kg" and to_unit == "lbs":
        return round(value / KG_PER_LB, CONVERSION_DECIMALS)
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))
