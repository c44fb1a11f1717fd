import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Iterable

BYTES_PER_MB = 1024 * 1024
KB_PER_MB = 1024


@dataclass(frozen=True)
class StatSummary:
    """Min / average / max of a list of numeric values"""
    min: float
    avg: float
    max: float


def calculate_stat_summary(values: Iterable[float]) -> StatSummary:
    """
    Calculate min/avg/max from a list of numeric values.

    Raises:
        ValueError: If values is empty. Callers must check for "no data" first.
    """
    values = list(values)
    if not values:
        raise ValueError("Cannot summarize an empty list of values")

    return StatSummary(
        min=min(values),
        avg=sum(values) / len(values),
        max=max(values),
    )


def is_finite_number(value: Any) -> bool:
    """True for int or float values other than bool, NaN and infinity."""
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def clamp_percent(value: float) -> float:
    """Clamp a percentage into [0, 100]; NaN becomes 0."""
    if value != value:
        return 0.0
    return max(0.0, min(100.0, float(value)))


def usage_percent(used: float, total: float) -> float:
    """Percentage of used over total rounded to one decimal, 0 when total is 0."""
    if total <= 0:
        return 0.0
    return clamp_percent(round(used / total * 100, 1))


def format_fixed(value: float, digits: int) -> str:
    """
    Format a number with a fixed count of decimals, rounding half away from zero.

    Works on the shortest decimal representation of the float, so 2.5 renders
    as "3" and 0.25 as "0.3" with one decimal.
    """
    try:
        quantum = Decimal(1).scaleb(-digits)
        rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return f"{value:.{digits}f}"
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:.{digits}f}"
