"""Configuration validation utilities."""

from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any

from .defaults import DefaultConfig, get_default_config


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _positive(value: Any) -> bool:
    return _is_number(value) and value > 0


def _non_negative(value: Any) -> bool:
    return _is_number(value) and value >= 0


def _fraction(value: Any) -> bool:
    return _is_number(value) and 0 <= value <= 1


def _percent(value: Any) -> bool:
    return _is_number(value) and 0 <= value <= 100


def _signed_percent(value: Any) -> bool:
    return _is_number(value) and -100 <= value <= 100


def _non_positive(value: Any) -> bool:
    return _is_number(value) and value <= 0


def _multiples(value: Any) -> bool:
    return (isinstance(value, (list, tuple)) and len(value) == 3
            and all(_positive(v) for v in value))


Check = tuple[Callable[[Any], bool], str]

POSITIVE_INT: Check = (_positive_int, "Must be a positive integer")
POSITIVE: Check = (_positive, "Must be a positive number")
NON_NEGATIVE: Check = (_non_negative, "Must be a non-negative number")
FRACTION: Check = (_fraction, "Must be a number between 0 and 1")
PERCENT: Check = (_percent, "Must be a number between 0 and 100")
SIGNED_PERCENT: Check = (_signed_percent, "Must be a number between -100 and 100")
NON_POSITIVE: Check = (_non_positive, "Must be zero or a negative number")
MULTIPLES: Check = (_multiples, "Must be a list of three positive numbers")

# Field checks per section; fields not listed default to NON_NEGATIVE
SECTION_CHECKS: dict[str, dict[str, Check]] = {
    "health": {
        "score_multiplier": POSITIVE,
        "neutral_score": PERCENT,
        "explosive_min": PERCENT,
        "strong_min": PERCENT,
        "normal_min": PERCENT,
    },
    "volume": {
        "trend_change_pct": POSITIVE,
        "neutral_relative_volume": POSITIVE,
        "leader_limit": POSITIVE_INT,
    },
    "vwad": {
        "bullish_min": SIGNED_PERCENT,
        "bearish_max": SIGNED_PERCENT,
    },
    "concentration": {
        "top_n": POSITIVE_INT,
        "universe_size": POSITIVE_INT,
        "risky_min": PERCENT,
        "normal_min": PERCENT,
    },
    "trend": {
        "slope_threshold_pct": NON_NEGATIVE,
    },
    "levels": {
        "lookback": POSITIVE_INT,
        "grouping_threshold": FRACTION,
        "max_levels": POSITIVE_INT,
        "strong_touches": POSITIVE_INT,
        "moderate_touches": POSITIVE_INT,
        "entry_premium": FRACTION,
    },
    "atr": {
        "period": POSITIVE_INT,
        "multiplier": POSITIVE,
        "risk_pct": FRACTION,
        "support_margin": FRACTION,
        "take_profit_multiples": MULTIPLES,
    },
    "insights": {},
    "diagnostic": {
        "vwad_bearish_threshold": SIGNED_PERCENT,
        "concentration_threshold": PERCENT,
        "cumulative_flow_threshold": NON_POSITIVE,
        "pe_overvaluation_threshold": POSITIVE,
        "immediate_sell_reds": POSITIVE_INT,
        "strong_sell_reds": POSITIVE_INT,
        "strong_sell_yellows": POSITIVE_INT,
    },
    "entry_plan": {
        "buy_proximity": FRACTION,
        "stop_loss_pct": FRACTION,
        "support_margin": FRACTION,
        "target_pct_min": POSITIVE,
        "target_pct_max": POSITIVE,
        "large_position": FRACTION,
        "medium_position": FRACTION,
        "base_position": FRACTION,
        "hold_position": FRACTION,
    },
    "baseline": {
        "market_average_volume": POSITIVE,
        "stock_average_volume": POSITIVE,
    },
}


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_section(section: str, params: dict[str, Any]) -> list[ValidationError]:
        """Validate one configuration section."""
        errors = []
        defaults = getattr(get_default_config(), section)
        known_fields = {f.name for f in fields(defaults)}
        checks = SECTION_CHECKS.get(section, {})

        for key, value in params.items():
            field_name = f"{section}.{key}"

            if key not in known_fields:
                errors.append(ValidationError(
                    field=field_name,
                    message="Unknown parameter",
                    value=value
                ))
                continue

            is_valid, message = checks.get(key, (_non_negative, NON_NEGATIVE[1]))
            if not is_valid(value):
                errors.append(ValidationError(
                    field=field_name,
                    message=message,
                    value=value
                ))

        return errors

    @staticmethod
    def validate_band_order(config: dict[str, Any]) -> list[ValidationError]:
        """Validate that paired thresholds are ordered consistently."""
        errors = []

        health = config.get("health", {})
        if health and not (health.get("normal_min", 0) <= health.get("strong_min", 0)
                           <= health.get("explosive_min", 0)):
            errors.append(ValidationError(
                field="health",
                message="Status bands must satisfy normal_min <= strong_min <= explosive_min",
                value=health
            ))

        concentration = config.get("concentration", {})
        if concentration and concentration.get("top_n", 0) > concentration.get("universe_size", 0):
            errors.append(ValidationError(
                field="concentration.top_n",
                message="Must not exceed universe_size",
                value=concentration.get("top_n")
            ))

        entry_plan = config.get("entry_plan", {})
        if entry_plan and entry_plan.get("target_pct_min", 0) > entry_plan.get("target_pct_max", 0):
            errors.append(ValidationError(
                field="entry_plan.target_pct_min",
                message="Must not exceed target_pct_max",
                value=entry_plan.get("target_pct_min")
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []
        sections = {f.name for f in fields(DefaultConfig)}

        for section, params in config.items():
            if section not in sections:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=params
                ))
                continue

            if not isinstance(params, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping of parameters",
                    value=params
                ))
                continue

            errors.extend(ConfigValidator.validate_section(section, params))

        if not errors:
            errors.extend(ConfigValidator.validate_band_order(config))

        return errors
