"""
Volume insight generation.

Turns computed volume metrics into ordered insight strings and a weighted
trading recommendation. Emission order is fixed: health, ratio vs average,
trend, conviction, distribution skew, concentration, top leader, unusual
volume count.
"""

from collections.abc import Sequence

from ..config.defaults import InsightParams, VolumeParams
from ..metrics.volume import format_volume
from ..models.volume import (
    ConcentrationData,
    ConcentrationLevel,
    ConvictionLevel,
    VolumeAnalysisData,
    VolumeHealthData,
    VolumeHealthStatus,
    VolumeLeader,
    VolumeRecommendation,
    VolumeTrend,
    VWADData,
)
from ..utils.numeric import clamp, round_half_up

ACTION_STRONG_BUY = "BUY – strong support"
ACTION_MODERATE_BUY = "BUY – moderate support"
ACTION_HOLD = "HOLD – mixed signals"
ACTION_WAIT = "WAIT – weak/bearish"

_HEALTH_TEMPLATES = {
    VolumeHealthStatus.EXPLOSIVE: "Explosive volume ({score}/100): strong institutional participation detected",
    VolumeHealthStatus.STRONG: "Strong volume ({score}/100): healthy participation above average",
    VolumeHealthStatus.NORMAL: "Normal volume ({score}/100): typical market participation",
    VolumeHealthStatus.ANEMIC: "Anemic volume ({score}/100): low participation, lacks conviction",
}

_CONVICTION_TEMPLATES = {
    ConvictionLevel.BULLISH: "Bullish conviction (VWAD: {score}): volume favors gainers, accumulation likely",
    ConvictionLevel.BEARISH: "Bearish conviction (VWAD: {score}): volume favors losers, distribution detected",
    ConvictionLevel.NEUTRAL: "Neutral conviction (VWAD: {score}): volume balanced between gainers and losers",
}

_CONCENTRATION_TEMPLATES = {
    ConcentrationLevel.RISKY: "Risky concentration ({score:.1f}%): top 5 stocks dominate volume, low diversification",
    ConcentrationLevel.NORMAL: "Normal concentration ({score:.1f}%): moderate diversification across leaders",
    ConcentrationLevel.HEALTHY: "Healthy concentration ({score:.1f}%): volume well diversified across many stocks",
}


def _health_insights(health: VolumeHealthData, params: InsightParams) -> list[str]:
    insights = [_HEALTH_TEMPLATES[health.health_status].format(score=health.health_score)]

    if health.average_volume > 0:
        ratio = health.current_volume / health.average_volume
        ratio_pct = int(round_half_up(ratio * 100))
        if ratio >= params.high_ratio:
            insights.append(f"Volume is {ratio_pct}% of 30-day average - unusual activity")
        elif ratio <= params.low_ratio:
            insights.append(f"Volume is {ratio_pct}% of 30-day average - light trading")

    if health.trend == VolumeTrend.UP:
        insights.append("Volume trending up - increasing market interest")
    elif health.trend == VolumeTrend.DOWN:
        insights.append("Volume trending down - waning participation")

    return insights


def _vwad_insights(vwad: VWADData, params: InsightParams) -> list[str]:
    insights = [_CONVICTION_TEMPLATES[vwad.conviction].format(score=vwad.vwad)]

    if vwad.total_volume > 0:
        up_pct = vwad.up_volume / vwad.total_volume * 100
        down_pct = vwad.down_volume / vwad.total_volume * 100
        if up_pct >= params.skew_pct:
            insights.append(f"{int(round_half_up(up_pct))}% of volume in gainers - strong buying pressure")
        elif down_pct >= params.skew_pct:
            insights.append(f"{int(round_half_up(down_pct))}% of volume in losers - strong selling pressure")

    return insights


def _concentration_insights(concentration: ConcentrationData) -> list[str]:
    template = _CONCENTRATION_TEMPLATES[concentration.concentration_level]
    return [template.format(score=concentration.concentration)]


def _leader_insights(leaders: Sequence[VolumeLeader], volume_params: VolumeParams) -> list[str]:
    if not leaders:
        return []

    top = leaders[0]
    insights = [f"Top volume: {top.symbol} ({format_volume(top.volume, decimals=1)})"]

    unusual = sum(1 for leader in leaders
                  if leader.relative_volume >= volume_params.unusual_relative_volume)
    if unusual:
        plural = "s" if unusual > 1 else ""
        insights.append(f"{unusual} stock{plural} with 2x+ unusual volume")

    return insights


def generate_volume_insights(
    analysis: VolumeAnalysisData,
    params: InsightParams = InsightParams(),
    volume_params: VolumeParams = VolumeParams(),
) -> list[str]:
    """
    Generate ordered insight strings for a volume analysis

    Args:
        analysis: Complete volume analysis
        params: Insight emission thresholds
        volume_params: Relative volume bands

    Returns:
        Insight strings in fixed category order
    """
    return [
        *_health_insights(analysis.health, params),
        *_vwad_insights(analysis.vwad, params),
        *_concentration_insights(analysis.concentration),
        *_leader_insights(analysis.leaders, volume_params),
    ]


def get_volume_trading_recommendation(
    analysis: VolumeAnalysisData,
    params: InsightParams = InsightParams(),
) -> VolumeRecommendation:
    """
    Score a volume analysis into a trading recommendation

    Health contributes up to 40 points, bullish conviction 40 and healthy
    concentration 20. The summed score selects the action and doubles as the
    confidence.

    Args:
        analysis: Complete volume analysis
        params: Point values and action bands

    Returns:
        VolumeRecommendation with action, joined reasons and confidence
    """
    score = 0
    reasons: list[str] = []

    health_score = analysis.health.health_score
    if health_score >= params.strong_health_min:
        score += params.strong_health_points
        reasons.append("Strong volume participation")
    elif health_score >= params.normal_health_min:
        score += params.normal_health_points
        reasons.append("Normal volume participation")
    else:
        reasons.append("Weak volume participation")

    conviction = analysis.vwad.conviction
    if conviction == ConvictionLevel.BULLISH:
        score += params.bullish_points
        reasons.append("Bullish conviction - volume favors gainers")
    elif conviction == ConvictionLevel.BEARISH:
        reasons.append("Bearish conviction - volume favors losers")

    level = analysis.concentration.concentration_level
    if level == ConcentrationLevel.HEALTHY:
        score += params.healthy_concentration_points
        reasons.append("Healthy diversification")
    elif level == ConcentrationLevel.RISKY:
        reasons.append("Risky concentration in few stocks")

    if score >= params.strong_buy_min:
        action = ACTION_STRONG_BUY
    elif score >= params.moderate_buy_min:
        action = ACTION_MODERATE_BUY
    elif score >= params.hold_min:
        action = ACTION_HOLD
    else:
        action = ACTION_WAIT

    return VolumeRecommendation(
        action=action,
        reason=", ".join(reasons),
        confidence=int(clamp(score, 0, 100)),
    )
