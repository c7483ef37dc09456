"""ATR (Average True Range) and derived stop-loss / take-profit levels"""

from collections.abc import Sequence
from typing import Optional

from ..config.defaults import ATRParams
from ..data.models import PriceBar
from ..models.levels import TakeProfitLevels


def calculate_true_range(current: PriceBar, previous: PriceBar) -> float:
    """
    Calculate True Range for a single bar

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))

    Args:
        current: Current bar
        previous: Previous bar

    Returns:
        True Range value
    """
    range_hl = current.high - current.low
    range_hc = abs(current.high - previous.close)
    range_lc = abs(current.low - previous.close)

    return max(range_hl, range_hc, range_lc)


def calculate_atr(bars: Sequence[PriceBar], period: int = 14) -> float:
    """
    Calculate Average True Range using a simple average

    Args:
        bars: Bars in chronological order
        period: ATR period (default 14)

    Returns:
        Mean of the last ``period`` true ranges, 0.0 with fewer than
        ``period + 1`` bars
    """
    if period <= 0 or len(bars) < period + 1:
        return 0.0

    true_ranges = [
        calculate_true_range(bars[i], bars[i - 1])
        for i in range(len(bars) - period, len(bars))
    ]
    return sum(true_ranges) / len(true_ranges)


def calculate_atr_stop_loss(entry_price: float, atr: float, multiplier: float = 2.0) -> float:
    """Stop loss ``multiplier`` ATRs below entry"""
    return entry_price - atr * multiplier


def calculate_stop_loss(
    entry_price: float,
    atr: float,
    support_level: Optional[float] = None,
    params: ATRParams = ATRParams(),
) -> float:
    """
    Calculate hybrid stop loss from ATR and support

    The tighter (higher) of the ATR stop and a structural stop is used: just
    below support when a support level is known, otherwise a fixed
    percentage below entry.

    Args:
        entry_price: Planned entry price
        atr: Average True Range
        support_level: Nearest support, None if unknown
        params: ATR parameters

    Returns:
        Stop loss price
    """
    atr_stop = calculate_atr_stop_loss(entry_price, atr, params.multiplier)

    if support_level:
        return max(atr_stop, support_level * params.support_margin)

    return max(atr_stop, entry_price * (1 - params.risk_pct))


def calculate_take_profit_levels(entry_price: float, stop_loss: float,
                                 params: ATRParams = ATRParams()) -> TakeProfitLevels:
    """
    Calculate take-profit ladder at fixed risk multiples

    Args:
        entry_price: Planned entry price
        stop_loss: Stop loss price

    Returns:
        TakeProfitLevels at 1.5x, 3x and 5x the entry-to-stop distance
    """
    risk = entry_price - stop_loss
    first, second, third = params.take_profit_multiples

    return TakeProfitLevels(
        tp1=entry_price + risk * first,
        tp2=entry_price + risk * second,
        tp3=entry_price + risk * third,
    )
