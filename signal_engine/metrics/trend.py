"""Linear-regression trend classification"""

from collections.abc import Sequence

from ..config.defaults import TrendParams
from ..models.volume import VolumeTrend


def calculate_slope(values: Sequence[float]) -> float:
    """
    Calculate least-squares slope of values against their index

    slope = sum((i - x_mean) * (y_i - y_mean)) / sum((i - x_mean)^2)

    Args:
        values: Ordered observations

    Returns:
        Slope per step, 0.0 for fewer than 2 points
    """
    n = len(values)
    if n < 2:
        return 0.0

    x_mean = (n - 1) / 2
    y_mean = sum(values) / n

    numerator = 0.0
    denominator = 0.0
    for i, y in enumerate(values):
        numerator += (i - x_mean) * (y - y_mean)
        denominator += (i - x_mean) ** 2

    if denominator == 0:
        return 0.0

    return numerator / denominator


def detect_trend(values: Sequence[float], params: TrendParams = TrendParams()) -> VolumeTrend:
    """
    Classify a series as rising, falling or flat

    The slope is normalized as a percentage of the series mean so the
    threshold is scale-free.

    Args:
        values: Ordered observations
        params: Trend parameters

    Returns:
        VolumeTrend.UP, DOWN or NEUTRAL
    """
    if len(values) < 2:
        return VolumeTrend.NEUTRAL

    slope = calculate_slope(values)
    mean = sum(values) / len(values)
    slope_pct = (slope / mean) * 100 if mean > 0 else 0.0

    if slope_pct > params.slope_threshold_pct:
        return VolumeTrend.UP
    if slope_pct < -params.slope_threshold_pct:
        return VolumeTrend.DOWN
    return VolumeTrend.NEUTRAL


# Volume history is the primary consumer
detect_volume_trend = detect_trend
