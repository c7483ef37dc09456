"""
Declarative rule table for the stock decline diagnostic.

Each rule names one observed metric, a comparator and a threshold drawn from
``DiagnosticThresholds``. A single generic evaluator applies any rule, so
every check in the battery can be tested on its own.
"""

import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import DiagnosticThresholds
from ..data.models import DiagnosticInput
from ..models.diagnostic import DiagnosticCategory, DiagnosticFlag, DiagnosticSeverity

MetricAccessor = Callable[[DiagnosticInput], Optional[float]]
ThresholdAccessor = Callable[[DiagnosticInput, DiagnosticThresholds], Optional[float]]

# Sector momentum labels treated as lagging the market
LAGGARD_MOMENTUM = frozenset({"Underperform", "Significant Lag"})

_COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">=": operator.ge,
    "==": operator.eq,
}


@dataclass(frozen=True)
class DiagnosticRule:
    """One threshold check in the diagnostic battery."""
    key: str
    category: DiagnosticCategory
    severity: DiagnosticSeverity
    metric: MetricAccessor
    comparator: str                  # One of '<', '<=', '>=', '=='
    threshold: ThresholdAccessor
    signal: str
    description: str
    action: str
    reports_value: bool = True       # False for yes/no checks
    reported: Optional[MetricAccessor] = None   # Value shown on a yes/no flag

    def compare(self, observed: float, limit: float) -> bool:
        return _COMPARATORS[self.comparator](observed, limit)


def evaluate_rule(rule: DiagnosticRule, data: DiagnosticInput,
                  thresholds: DiagnosticThresholds) -> Optional[DiagnosticFlag]:
    """
    Apply one rule to a diagnostic input

    Args:
        rule: Rule to evaluate
        data: Stock diagnostic input
        thresholds: Threshold values

    Returns:
        DiagnosticFlag when the rule triggers, None when it does not or when
        the metric or threshold is unavailable
    """
    observed = rule.metric(data)
    if observed is None:
        return None

    limit = rule.threshold(data, thresholds)
    if limit is None:
        return None

    if not rule.compare(observed, limit):
        return None

    if not rule.reports_value:
        return DiagnosticFlag(
            category=rule.category,
            severity=rule.severity,
            signal=rule.signal,
            description=rule.description,
            action=rule.action,
            value=rule.reported(data) if rule.reported else None,
        )

    return DiagnosticFlag(
        category=rule.category,
        severity=rule.severity,
        signal=rule.signal,
        description=rule.description,
        action=rule.action,
        value=observed,
        comparison=f"{observed:g} {rule.comparator} {limit:g}",
    )


# Metric accessors

def _relative_volume(data: DiagnosticInput) -> Optional[float]:
    return data.technical.relative_volume


def _sector_laggard(data: DiagnosticInput) -> Optional[float]:
    if data.sector is None:
        return None
    return float(data.sector.momentum in LAGGARD_MOMENTUM)


def _sector_vs_market(data: DiagnosticInput) -> Optional[float]:
    return data.sector.vs_market if data.sector else None


def _sector_exit_confidence(data: DiagnosticInput) -> Optional[float]:
    if data.sector is None or data.sector.signal != "Exit":
        return None
    return data.sector.confidence


def _risk_off_confirmed(data: DiagnosticInput) -> Optional[float]:
    if data.regime is None:
        return None
    return float(data.regime.regime == "Risk-Off" and data.regime.confirmed)


def _top_loser(data: DiagnosticInput) -> float:
    return float(data.technical.is_top_loser or data.symbol in data.rankings.top_losers)


def _ranked(data: DiagnosticInput) -> float:
    return float(data.technical.is_in_any_ranking or data.rankings.contains(data.symbol))


def _weaker_trend(data: DiagnosticInput) -> float:
    # Both trends are negative exactly when the larger one is
    return max(data.technical.trend_5d, data.technical.trend_20d)


def _stock_pe(data: DiagnosticInput) -> Optional[float]:
    if data.valuation is None:
        return None
    return data.valuation.stock_pe


def _pe_limit(reference: Optional[float], thresholds: DiagnosticThresholds) -> Optional[float]:
    if reference is None or reference <= 0:
        return None
    return reference * thresholds.pe_overvaluation_threshold


def _sector_pe_limit(data: DiagnosticInput, thresholds: DiagnosticThresholds) -> Optional[float]:
    return _pe_limit(data.valuation.sector_pe if data.valuation else None, thresholds)


def _historical_pe_limit(data: DiagnosticInput, thresholds: DiagnosticThresholds) -> Optional[float]:
    return _pe_limit(data.valuation.historical_pe if data.valuation else None, thresholds)


def _yes(_data: DiagnosticInput, _thresholds: DiagnosticThresholds) -> float:
    return 1.0


def _no(_data: DiagnosticInput, _thresholds: DiagnosticThresholds) -> float:
    return 0.0


VOLUME = DiagnosticCategory.VOLUME
SECTOR = DiagnosticCategory.SECTOR
SMART_MONEY = DiagnosticCategory.SMART_MONEY
TECHNICAL = DiagnosticCategory.TECHNICAL
VALUATION = DiagnosticCategory.VALUATION
RED = DiagnosticSeverity.RED
YELLOW = DiagnosticSeverity.YELLOW


DEFAULT_RULES: tuple[DiagnosticRule, ...] = (
    # Volume
    DiagnosticRule(
        key="anemic_volume",
        category=VOLUME,
        severity=YELLOW,
        metric=lambda d: d.volume.health.health_score,
        comparator="<",
        threshold=lambda d, t: t.volume_health_threshold,
        signal="Anemic Volume",
        description="Trading volume is critically low, indicating weak liquidity and lack of investor interest.",
        action="Exercise caution - bid-ask spreads may widen significantly.",
    ),
    DiagnosticRule(
        key="bearish_conviction",
        category=VOLUME,
        severity=YELLOW,
        metric=lambda d: d.volume.vwad.vwad,
        comparator="<=",
        threshold=lambda d, t: t.vwad_bearish_threshold,
        signal="Bearish Conviction",
        description="Volume-weighted advance/decline shows strong bearish conviction.",
        action="Sell pressure is confirmed by volume - avoid catching a falling knife.",
    ),
    DiagnosticRule(
        key="illiquid_market",
        category=VOLUME,
        severity=YELLOW,
        metric=lambda d: d.volume.concentration.concentration,
        comparator=">=",
        threshold=lambda d, t: t.concentration_threshold,
        signal="Illiquid Market",
        description="High concentration in top stocks indicates illiquid market conditions.",
        action="Exit and re-entry costs may be high - consider market impact.",
    ),
    DiagnosticRule(
        key="low_relative_volume",
        category=VOLUME,
        severity=YELLOW,
        metric=_relative_volume,
        comparator="<",
        threshold=lambda d, t: t.relative_volume_low_threshold,
        signal="Low Relative Volume",
        description="Trading volume is well below its 30-day average, indicating weak participation.",
        action="Wait for volume confirmation before making decisions.",
    ),
    # Sector / market context
    DiagnosticRule(
        key="laggard_sector",
        category=SECTOR,
        severity=RED,
        metric=_sector_laggard,
        comparator="==",
        threshold=_yes,
        signal="Laggard Sector",
        description="Stock sector is underperforming the market significantly.",
        action="Consider rotating to leading sectors or defensive positions.",
        reports_value=False,
        reported=_sector_vs_market,
    ),
    DiagnosticRule(
        key="sector_exit_signal",
        category=SECTOR,
        severity=RED,
        metric=_sector_exit_confidence,
        comparator=">=",
        threshold=lambda d, t: t.sector_exit_confidence,
        signal="Sector Exit Signal",
        description="Strong rotation signal detected - money flowing out of this sector.",
        action="Follow the smart money - reduce exposure to this sector.",
    ),
    DiagnosticRule(
        key="risk_off_market",
        category=SECTOR,
        severity=RED,
        metric=_risk_off_confirmed,
        comparator="==",
        threshold=_yes,
        signal="Risk-Off Market",
        description="Market regime confirmed as risk-off - defensive positioning favored.",
        action="Reduce cyclical exposure, increase defensive holdings.",
        reports_value=False,
    ),
    # Smart money
    DiagnosticRule(
        key="foreign_strong_sell",
        category=SMART_MONEY,
        severity=RED,
        metric=lambda d: d.smart_money.foreign.today_net,
        comparator="<",
        threshold=lambda d, t: -t.strong_foreign_sell_threshold,
        signal="Foreign Strong Sell",
        description="Foreign investors are aggressively selling this stock.",
        action="Foreign flows lead price action - consider following their lead.",
    ),
    DiagnosticRule(
        key="institution_selling",
        category=SMART_MONEY,
        severity=YELLOW,
        metric=lambda d: d.smart_money.institution.today_net,
        comparator="<",
        threshold=lambda d, t: -t.institution_sell_threshold,
        signal="Institution Selling",
        description="Institutional investors are net sellers.",
        action="Smart money distribution - reduce positions.",
    ),
    DiagnosticRule(
        key="low_smart_money_score",
        category=SMART_MONEY,
        severity=YELLOW,
        metric=lambda d: d.smart_money.score,
        comparator="<",
        threshold=lambda d, t: t.smart_money_score_threshold,
        signal="Low Smart Money Score",
        description="Smart money sentiment is bearish.",
        action="Wait for smart money confirmation before buying.",
    ),
    DiagnosticRule(
        key="negative_cumulative_flow",
        category=SMART_MONEY,
        severity=RED,
        metric=lambda d: d.smart_money.foreign.trend_5day,
        comparator="<",
        threshold=lambda d, t: t.cumulative_flow_threshold,
        signal="Negative Cumulative Flow",
        description="5-day cumulative flow is strongly negative.",
        action="Sustained selling pressure - avoid counter-trend trades.",
    ),
    # Technical / price action
    DiagnosticRule(
        key="top_loser",
        category=TECHNICAL,
        severity=YELLOW,
        metric=_top_loser,
        comparator="==",
        threshold=_yes,
        signal="Top Loser",
        description="Stock is in the top 10 losers today.",
        action="Strong downside momentum - wait for stabilization.",
        reports_value=False,
    ),
    DiagnosticRule(
        key="near_52_week_low",
        category=TECHNICAL,
        severity=YELLOW,
        metric=lambda d: d.technical.week52_position,
        comparator="<",
        threshold=lambda d, t: t.week52_position_low_threshold,
        signal="Near 52-Week Low",
        description="Stock is trading in the bottom 20% of its 52-week range.",
        action="Support levels may be tested - risk of further decline.",
    ),
    DiagnosticRule(
        key="absent_from_rankings",
        category=TECHNICAL,
        severity=YELLOW,
        metric=_ranked,
        comparator="==",
        threshold=_no,
        signal="Absent from Rankings",
        description="Stock is not present in any top ranking.",
        action="Lack of market interest - consider why the stock is ignored.",
        reports_value=False,
    ),
    DiagnosticRule(
        key="negative_trend",
        category=TECHNICAL,
        severity=RED,
        metric=_weaker_trend,
        comparator="<",
        threshold=_no,
        signal="Negative Short & Long Trend",
        description="Both 5-day and 20-day trends are negative.",
        action="Downtrend confirmed across timeframes.",
        reports_value=False,
    ),
    # Valuation
    DiagnosticRule(
        key="overvalued_vs_sector",
        category=VALUATION,
        severity=YELLOW,
        metric=_stock_pe,
        comparator=">=",
        threshold=_sector_pe_limit,
        signal="Overvalued vs Sector",
        description="P/E is significantly higher than the sector average.",
        action="Valuation risk - consider switching to sector peers.",
    ),
    DiagnosticRule(
        key="overvalued_vs_history",
        category=VALUATION,
        severity=YELLOW,
        metric=_stock_pe,
        comparator=">=",
        threshold=_historical_pe_limit,
        signal="Overvalued vs History",
        description="P/E is significantly higher than its historical average.",
        action="Valuation mean reversion risk - upside limited.",
    ),
)


def get_rule(key: str, rules: tuple[DiagnosticRule, ...] = DEFAULT_RULES) -> DiagnosticRule:
    """Look up a rule by key"""
    for rule in rules:
        if rule.key == key:
            return rule
    raise KeyError(key)
