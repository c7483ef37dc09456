"""Pivot-based support and resistance detection"""

from collections.abc import Sequence
from typing import Optional

from ..config.defaults import LevelParams
from ..data.models import PriceBar
from ..models.levels import (
    LevelStrength,
    LevelType,
    PivotPoint,
    PivotType,
    SupportResistanceLevel,
    SupportResistanceLevels,
)


def find_pivot_points(bars: Sequence[PriceBar], lookback: int = 5) -> list[PivotPoint]:
    """
    Find local highs and lows

    A bar is a local high when every other bar within ``lookback`` bars on
    either side has a strictly lower high; ties disqualify it. Lows are
    symmetric. Bars without a full window on both sides are skipped.

    Args:
        bars: Bars in chronological order
        lookback: Half-window size in bars

    Returns:
        Pivots in bar order, a bar may yield both a high and a low
    """
    pivots: list[PivotPoint] = []

    for i in range(lookback, len(bars) - lookback):
        current = bars[i]
        is_high = True
        is_low = True

        for j in range(i - lookback, i + lookback + 1):
            if j == i:
                continue
            if bars[j].high >= current.high:
                is_high = False
            if bars[j].low <= current.low:
                is_low = False

        if is_high:
            pivots.append(PivotPoint(price=current.high, date=current.date, type=PivotType.HIGH))
        if is_low:
            pivots.append(PivotPoint(price=current.low, date=current.date, type=PivotType.LOW))

    return pivots


def group_price_levels(pivots: Sequence[PivotPoint],
                       threshold: float = 0.02) -> dict[float, list[PivotPoint]]:
    """
    Group nearby pivot prices

    Pivots are taken in date order; each joins the first group whose key
    price is within ``threshold`` relative distance, otherwise it opens a new
    group keyed by its own price. Keys are never recomputed.

    Args:
        pivots: Pivot candidates
        threshold: Relative distance for joining a group

    Returns:
        Mapping of group key price to member pivots, in creation order
    """
    groups: dict[float, list[PivotPoint]] = {}

    for pivot in sorted(pivots, key=lambda p: p.date):
        for group_price, members in groups.items():
            if group_price > 0 and abs(pivot.price - group_price) / group_price <= threshold:
                members.append(pivot)
                break
        else:
            groups.setdefault(pivot.price, []).append(pivot)

    return groups


def classify_strength(touches: int, params: LevelParams = LevelParams()) -> LevelStrength:
    """Tier a level by its touch count"""
    if touches >= params.strong_touches:
        return LevelStrength.STRONG
    if touches >= params.moderate_touches:
        return LevelStrength.MODERATE
    return LevelStrength.WEAK


def _build_level(price: float, members: list[PivotPoint], level_type: LevelType,
                 params: LevelParams) -> SupportResistanceLevel:
    return SupportResistanceLevel(
        price=price,
        type=level_type,
        strength=classify_strength(len(members), params),
        touches=len(members),
        last_touch_date=max(p.date for p in members),
    )


def calculate_support_resistance(bars: Sequence[PriceBar],
                                 params: LevelParams = LevelParams()) -> SupportResistanceLevels:
    """
    Calculate support and resistance levels around the last close

    Args:
        bars: Bars in chronological order
        params: Level detection parameters

    Returns:
        Support levels below the last close (nearest first) and resistance
        levels above it (nearest first), each capped at ``max_levels``
    """
    if not bars:
        return SupportResistanceLevels()

    pivots = find_pivot_points(bars, params.lookback)
    high_groups = group_price_levels([p for p in pivots if p.type == PivotType.HIGH],
                                     params.grouping_threshold)
    low_groups = group_price_levels([p for p in pivots if p.type == PivotType.LOW],
                                    params.grouping_threshold)

    current_price = bars[-1].close

    resistance = sorted(
        (item for item in high_groups.items() if item[0] > current_price),
        key=lambda item: item[0],
    )[:params.max_levels]

    support = sorted(
        (item for item in low_groups.items() if item[0] < current_price),
        key=lambda item: item[0],
        reverse=True,
    )[:params.max_levels]

    return SupportResistanceLevels(
        support=tuple(_build_level(price, members, LevelType.SUPPORT, params)
                      for price, members in support),
        resistance=tuple(_build_level(price, members, LevelType.RESISTANCE, params)
                         for price, members in resistance),
    )


def suggest_entry_point(support_levels: Sequence[SupportResistanceLevel],
                        premium: float = 0.02) -> Optional[float]:
    """Entry at a small premium above the nearest support, None without support"""
    if not support_levels:
        return None

    return support_levels[0].price * (1 + premium)
