"""Metrics calculation for volume, trend and price-level indicators"""

from .atr import (
    calculate_atr,
    calculate_atr_stop_loss,
    calculate_stop_loss,
    calculate_take_profit_levels,
    calculate_true_range,
)
from .calculator import VolumeMetricsCalculator
from .levels import (
    calculate_support_resistance,
    find_pivot_points,
    group_price_levels,
    suggest_entry_point,
)
from .trend import calculate_slope, detect_trend, detect_volume_trend
from .volume import (
    calculate_concentration,
    calculate_health_score,
    calculate_relative_volume,
    calculate_volume_health,
    calculate_vwad,
    identify_volume_leaders,
)

__all__ = [
    "VolumeMetricsCalculator",
    "calculate_atr",
    "calculate_atr_stop_loss",
    "calculate_stop_loss",
    "calculate_take_profit_levels",
    "calculate_true_range",
    "calculate_support_resistance",
    "find_pivot_points",
    "group_price_levels",
    "suggest_entry_point",
    "calculate_slope",
    "detect_trend",
    "detect_volume_trend",
    "calculate_concentration",
    "calculate_health_score",
    "calculate_relative_volume",
    "calculate_volume_health",
    "calculate_vwad",
    "identify_volume_leaders",
]
