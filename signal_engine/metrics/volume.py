"""Volume health, VWAD, concentration and relative volume calculations"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Optional

from ..config.defaults import (
    BaselineParams,
    ConcentrationParams,
    HealthParams,
    VolumeParams,
    VWADParams,
)
from ..data.models import StockVolume
from ..logging.config import get_logger
from ..models.volume import (
    BaselineSource,
    ConcentrationData,
    ConcentrationLevel,
    ConvictionLevel,
    VolumeHealthData,
    VolumeHealthStatus,
    VolumeLeader,
    VolumeTrend,
    VWADData,
)
from ..utils.numeric import clamp, non_negative, round_half_up

logger = get_logger(__name__)


# Volume health

def get_health_status(score: int, params: HealthParams = HealthParams()) -> VolumeHealthStatus:
    """Map a 0-100 health score onto its status band"""
    if score >= params.explosive_min:
        return VolumeHealthStatus.EXPLOSIVE
    if score >= params.strong_min:
        return VolumeHealthStatus.STRONG
    if score >= params.normal_min:
        return VolumeHealthStatus.NORMAL
    return VolumeHealthStatus.ANEMIC


def calculate_health_score(current_volume: float, average_volume: float,
                           params: HealthParams = HealthParams()) -> int:
    """
    Calculate volume health score

    score = clamp(round((current / average) * 50), 0, 100)

    Args:
        current_volume: Today's volume
        average_volume: Baseline average in the same unit
        params: Health parameters

    Returns:
        Integer score 0-100, neutral score when average is not positive
    """
    current = non_negative(current_volume)
    average = non_negative(average_volume)
    if average <= 0:
        return params.neutral_score

    ratio = current / average
    score = clamp(ratio * params.score_multiplier, 0.0, 100.0)
    return int(round_half_up(score))


def calculate_volume_trend(current_volume: float, previous_volume: Optional[float] = None,
                           params: VolumeParams = VolumeParams()) -> VolumeTrend:
    """
    Classify today's volume against a previous-period volume

    Args:
        current_volume: Today's volume
        previous_volume: Previous day (or 5-day average) volume, None if unknown
        params: Volume parameters

    Returns:
        Trend direction, NEUTRAL when previous volume is missing or zero
    """
    previous = non_negative(previous_volume)
    if not previous:
        return VolumeTrend.NEUTRAL

    change_pct = ((non_negative(current_volume) - previous) / previous) * 100

    if change_pct > params.trend_change_pct:
        return VolumeTrend.UP
    if change_pct < -params.trend_change_pct:
        return VolumeTrend.DOWN
    return VolumeTrend.NEUTRAL


def calculate_volume_health(
    current_volume: float,
    average_volume: Optional[float] = None,
    previous_volume: Optional[float] = None,
    health_params: HealthParams = HealthParams(),
    volume_params: VolumeParams = VolumeParams(),
    baseline: BaselineParams = BaselineParams(),
) -> VolumeHealthData:
    """
    Calculate volume health metrics

    Args:
        current_volume: Today's total volume (millions)
        average_volume: 30-day average, None to use the configured fallback
        previous_volume: Previous-period volume for trend, optional
        health_params: Health score parameters
        volume_params: Trend parameters
        baseline: Fallback baselines

    Returns:
        VolumeHealthData with provenance of the average
    """
    if average_volume is None:
        logger.debug("Using fallback market average volume",
                     fallback=baseline.market_average_volume)
        average_volume = baseline.market_average_volume
        source = BaselineSource.FALLBACK
    else:
        source = BaselineSource.OBSERVED

    current = non_negative(current_volume)
    average = non_negative(average_volume)

    score = calculate_health_score(current, average, health_params)

    return VolumeHealthData(
        current_volume=current,
        average_volume=average,
        health_score=score,
        health_status=get_health_status(score, health_params),
        trend=calculate_volume_trend(current, previous_volume, volume_params),
        baseline_source=source,
    )


def average_from_history(
    volumes: Sequence[float],
    scale: float = 1.0,
    baseline: BaselineParams = BaselineParams(),
) -> tuple[float, BaselineSource]:
    """
    Average a volume history into a health baseline

    Args:
        volumes: Historical volumes
        scale: Divisor converting history units to baseline units
            (1000 for thousands -> millions)
        baseline: Fallback baselines

    Returns:
        (average, source) with the market fallback when history is empty
    """
    if not volumes:
        return baseline.market_average_volume, BaselineSource.FALLBACK

    return sum(volumes) / len(volumes) / scale, BaselineSource.OBSERVED


# VWAD

def get_conviction_level(vwad: float, params: VWADParams = VWADParams()) -> ConvictionLevel:
    """Map a VWAD score onto its conviction"""
    if vwad >= params.bullish_min:
        return ConvictionLevel.BULLISH
    if vwad <= params.bearish_max:
        return ConvictionLevel.BEARISH
    return ConvictionLevel.NEUTRAL


def calculate_vwad(rows: Iterable[StockVolume], params: VWADParams = VWADParams()) -> VWADData:
    """
    Calculate Volume-Weighted Advance/Decline

    VWAD = ((up_volume - down_volume) / total_volume) * 100

    Every row contributes to total_volume; flat rows (change == 0) add to
    neither the up nor the down bucket.

    Args:
        rows: Stocks with volume and price change
        params: Conviction cutoffs

    Returns:
        VWADData, all zeros and NEUTRAL for empty input
    """
    up_volume = 0.0
    down_volume = 0.0
    total_volume = 0.0

    for row in rows:
        volume = non_negative(row.volume)
        total_volume += volume

        if row.change > 0:
            up_volume += volume
        elif row.change < 0:
            down_volume += volume

    vwad = 0.0
    if total_volume > 0:
        vwad = ((up_volume - down_volume) / total_volume) * 100

    return VWADData(
        vwad=round_half_up(vwad, 2),
        conviction=get_conviction_level(vwad, params),
        up_volume=up_volume,
        down_volume=down_volume,
        total_volume=total_volume,
    )


# Concentration

def get_concentration_level(concentration: float,
                            params: ConcentrationParams = ConcentrationParams()) -> ConcentrationLevel:
    """Map a concentration percentage onto its risk level"""
    if concentration >= params.risky_min:
        return ConcentrationLevel.RISKY
    if concentration >= params.normal_min:
        return ConcentrationLevel.NORMAL
    return ConcentrationLevel.HEALTHY


def calculate_concentration(rows: Iterable[StockVolume],
                            params: ConcentrationParams = ConcentrationParams()) -> ConcentrationData:
    """
    Calculate share of volume held by the top stocks

    concentration = top5_volume / top30_volume * 100

    Args:
        rows: Stocks with volume
        params: Concentration parameters

    Returns:
        ConcentrationData, zero and HEALTHY for empty or zero-volume input
    """
    volumes = sorted((non_negative(row.volume) for row in rows), reverse=True)

    top_volume = sum(volumes[:params.top_n])
    total_volume = sum(volumes[:params.universe_size])

    concentration = 0.0
    if total_volume > 0:
        concentration = (top_volume / total_volume) * 100

    return ConcentrationData(
        top5_volume=top_volume,
        total_volume=total_volume,
        concentration=round_half_up(concentration, 2),
        concentration_level=get_concentration_level(concentration, params),
    )


# Relative volume

def calculate_relative_volume(stock_volume: float, stock_average: float,
                              params: VolumeParams = VolumeParams()) -> float:
    """
    Calculate relative volume for a single stock

    Args:
        stock_volume: Current stock volume
        stock_average: Stock's average volume

    Returns:
        Ratio rounded to 2 decimals, neutral value when average is not positive
    """
    average = non_negative(stock_average)
    if average <= 0:
        return params.neutral_relative_volume

    return round_half_up(non_negative(stock_volume) / average, 2)


def calculate_batch_relative_volume(
    rows: Iterable[StockVolume],
    averages: Optional[Mapping[str, float]] = None,
    params: VolumeParams = VolumeParams(),
    baseline: BaselineParams = BaselineParams(),
) -> dict[str, float]:
    """
    Calculate relative volume for many stocks

    Symbols missing from averages use the fallback per-stock average.

    Returns:
        Mapping of symbol to relative volume
    """
    averages = averages or {}
    return {
        row.symbol: calculate_relative_volume(
            non_negative(row.volume),
            averages.get(row.symbol, baseline.stock_average_volume),
            params,
        )
        for row in rows
    }


def identify_volume_leaders(
    rows: Iterable[StockVolume],
    averages: Optional[Mapping[str, float]] = None,
    params: VolumeParams = VolumeParams(),
    baseline: BaselineParams = BaselineParams(),
) -> tuple[VolumeLeader, ...]:
    """
    Identify the most active stocks with their relative volume

    Returns:
        Up to ``params.leader_limit`` leaders, highest volume first
    """
    averages = averages or {}
    leaders = [
        VolumeLeader(
            symbol=row.symbol,
            volume=non_negative(row.volume),
            relative_volume=calculate_relative_volume(
                non_negative(row.volume),
                averages.get(row.symbol, baseline.stock_average_volume),
                params,
            ),
            price_change=row.change,
        )
        for row in rows
    ]
    leaders.sort(key=lambda leader: leader.volume, reverse=True)
    return tuple(leaders[:params.leader_limit])


def is_volume_anomaly(relative_volume: float, params: VolumeParams = VolumeParams()) -> bool:
    """True for unusually heavy (2x+) or light (0.5x-) volume"""
    return (relative_volume >= params.unusual_relative_volume
            or relative_volume <= params.light_relative_volume)


def describe_volume_anomaly(relative_volume: float, params: VolumeParams = VolumeParams()) -> str:
    """Describe an anomalous relative volume, empty string for normal volume"""
    if relative_volume >= params.extreme_relative_volume:
        return "Extreme volume spike - major news or event"
    if relative_volume >= params.unusual_relative_volume:
        return "Unusual volume - significant activity"
    if relative_volume <= params.very_light_relative_volume:
        return "Extremely light volume - possible halt or illiquidity"
    if relative_volume <= params.light_relative_volume:
        return "Below normal volume - light trading"
    return ""


def format_volume(volume_millions: float, decimals: int = 2) -> str:
    """Format a volume in millions, e.g. '42.50B' or '1.20T'"""
    if volume_millions >= 1_000_000:
        return f"{volume_millions / 1_000_000:.{decimals}f}T"
    if volume_millions >= 1000:
        return f"{volume_millions / 1000:.{decimals}f}B"
    return f"{volume_millions:.{decimals}f}M"
