"""Rounding and clamping helpers shared by the metric calculators."""

import math
from typing import Optional


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round half toward positive infinity.

    Exact halves go up, so ``2.5 -> 3`` and ``-2.5 -> -2``; the built-in
    ``round`` would give 2 and -2.

    Args:
        value: Number to round
        digits: Decimal places to keep

    Returns:
        Rounded value, or the input unchanged when it is NaN or infinite
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into the closed interval [lower, upper]."""
    return max(lower, min(upper, value))


def non_negative(value: Optional[float]) -> float:
    """Clamp missing, negative or non-finite observations to zero."""
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return value
