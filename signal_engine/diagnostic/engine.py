"""
Stock decline diagnostic evaluation.

Runs the rule battery over one stock, then maps the red/yellow flag counts
onto an overall action:

- 3+ red flags -> IMMEDIATE_SELL
- 2+ red and 2+ yellow -> STRONG_SELL
- 1-2 red flags -> TRIM
- otherwise -> HOLD
"""

from collections.abc import Sequence

from ..config.defaults import DiagnosticThresholds
from ..data.models import DiagnosticInput
from ..logging.config import get_diagnostic_logger, log_flag_decision, log_overall_action
from ..models.diagnostic import (
    CategoryCount,
    DiagnosticAction,
    DiagnosticCategory,
    DiagnosticFlag,
    DiagnosticSeverity,
    FlagCounts,
    StockDiagnosticResult,
)
from .rules import DEFAULT_RULES, DiagnosticRule, evaluate_rule

logger = get_diagnostic_logger(__name__)


def _severity_counts(flags: Sequence[DiagnosticFlag]) -> tuple[int, int]:
    red = sum(1 for flag in flags if flag.severity == DiagnosticSeverity.RED)
    return red, len(flags) - red


def determine_overall_action(
    flags: Sequence[DiagnosticFlag],
    thresholds: DiagnosticThresholds = DiagnosticThresholds(),
) -> DiagnosticAction:
    """Apply the flag-count decision table, first matching row wins"""
    red, yellow = _severity_counts(flags)

    if red >= thresholds.immediate_sell_reds:
        return DiagnosticAction.IMMEDIATE_SELL
    if red >= thresholds.strong_sell_reds and yellow >= thresholds.strong_sell_yellows:
        return DiagnosticAction.STRONG_SELL
    if red >= 1:
        return DiagnosticAction.TRIM
    return DiagnosticAction.HOLD


def calculate_risk_level(
    flags: Sequence[DiagnosticFlag],
    thresholds: DiagnosticThresholds = DiagnosticThresholds(),
) -> int:
    """Weighted flag count capped at 100"""
    red, yellow = _severity_counts(flags)
    return min(100, red * thresholds.red_risk_weight + yellow * thresholds.yellow_risk_weight)


def count_flags_by_category(flags: Sequence[DiagnosticFlag]) -> dict[DiagnosticCategory, CategoryCount]:
    """Tally red and yellow flags for every category, including empty ones"""
    counts = {}
    for category in DiagnosticCategory:
        in_category = [flag for flag in flags if flag.category == category]
        red, yellow = _severity_counts(in_category)
        counts[category] = CategoryCount(red=red, yellow=yellow)
    return counts


def generate_diagnostic_summary(symbol: str, flags: Sequence[DiagnosticFlag],
                                action: DiagnosticAction) -> str:
    """Build the one-line summary shown with a diagnostic result"""
    red, yellow = _severity_counts(flags)
    flag_summary = (
        f"{red} red flag{'s' if red != 1 else ''}, "
        f"{yellow} yellow flag{'s' if yellow != 1 else ''}"
    )

    if action == DiagnosticAction.IMMEDIATE_SELL:
        return (f"{symbol}: {action.value} - Critical warning! {flag_summary}. "
                "Multiple failures detected across volume, smart money and technical "
                "indicators. Immediate position reduction recommended.")

    if action == DiagnosticAction.STRONG_SELL:
        return (f"{symbol}: {action.value} - Strong sell signal. {flag_summary}. "
                "Confirmed selling pressure across multiple dimensions. "
                "Consider reducing 50% of position.")

    if action == DiagnosticAction.TRIM:
        return (f"{symbol}: {action.value} - Moderate warning. {flag_summary}. "
                "Some concerning signals detected. Consider trimming 25-30% of position.")

    if not flags:
        return (f"{symbol}: {action.value} - No significant decline signals detected. "
                "Normal volatility, continue monitoring.")

    return (f"{symbol}: {action.value} - Caution advised. {flag_summary}. "
            "Minor concerns but no immediate action required. Maintain current position.")


def diagnose_stock(
    data: DiagnosticInput,
    thresholds: DiagnosticThresholds = DiagnosticThresholds(),
    rules: Sequence[DiagnosticRule] = DEFAULT_RULES,
) -> StockDiagnosticResult:
    """
    Perform the complete decline diagnostic for one stock

    Args:
        data: Volume, smart money, sector, technical and valuation inputs
        thresholds: Threshold values for the rule battery
        rules: Rule table, in emission order

    Returns:
        StockDiagnosticResult with flags in rule-table order
    """
    flags: list[DiagnosticFlag] = []

    for rule in rules:
        flag = evaluate_rule(rule, data, thresholds)
        log_flag_decision(
            logger,
            rule_key=rule.key,
            triggered=flag is not None,
            symbol=data.symbol,
            severity=rule.severity.value,
            value=flag.value if flag else None,
        )
        if flag is not None:
            flags.append(flag)

    action = determine_overall_action(flags, thresholds)
    risk_level = calculate_risk_level(flags, thresholds)
    red_flags = tuple(flag for flag in flags if flag.severity == DiagnosticSeverity.RED)
    yellow_flags = tuple(flag for flag in flags if flag.severity == DiagnosticSeverity.YELLOW)

    log_overall_action(
        logger,
        symbol=data.symbol,
        action=action.value,
        red_count=len(red_flags),
        yellow_count=len(yellow_flags),
        risk_level=risk_level,
    )

    return StockDiagnosticResult(
        symbol=data.symbol,
        overall_action=action,
        red_flags=red_flags,
        yellow_flags=yellow_flags,
        flag_counts=FlagCounts(
            red=len(red_flags),
            yellow=len(yellow_flags),
            by_category=count_flags_by_category(flags),
        ),
        risk_level=risk_level,
        summary=generate_diagnostic_summary(data.symbol, flags, action),
    )
