"""
Entry plan calculation.

Builds a long trade plan (buy, stop, target, size) from the current price, a
support level and an external target estimate. This is the only calculation
in the engine that raises on bad input: a plan built on non-positive prices
is unsafe to present.
"""

import math
from typing import Union

from ..config.defaults import EntryPlanParams
from ..errors import EntryPlanValidationError
from ..logging.config import get_planning_logger
from ..models.entry_plan import (
    EntryDecision,
    EntryPlan,
    PositionSize,
    PriceLevel,
    PricePoint,
    RiskReward,
)
from ..utils.numeric import clamp

logger = get_planning_logger(__name__)

BUY_RATIONALE = "Buy near support level with margin of safety"
STOP_RATIONALE = "Stop below support or at maximum tolerated loss, whichever is lower"
TARGET_RATIONALE = "Target estimate bounded to the planned reward range"

_SIZE_RATIONALES = {
    "large": "Full position: entry well below current price",
    "medium": "Standard position: entry moderately below current price",
    "base": "Starter position: entry close to current price",
    EntryDecision.HOLD: "Small position: hold decision, no new conviction",
    EntryDecision.PASS: "No position: pass decision",
}


def _validate_price(field: str, value: float) -> None:
    if value is None or not math.isfinite(value) or value <= 0:
        logger.warning("Entry plan rejected", field=field, value=value)
        raise EntryPlanValidationError(
            f"{field} must be a positive finite price, got {value!r}",
            field=field,
            value=value,
        )


def _validate_decision(decision: Union[EntryDecision, str]) -> EntryDecision:
    try:
        return EntryDecision(decision)
    except ValueError as e:
        logger.warning("Entry plan rejected", field="decision", value=decision)
        raise EntryPlanValidationError(
            f"decision must be one of {[d.value for d in EntryDecision]}, got {decision!r}",
            field="decision",
            value=decision,
        ) from e


def should_show_entry_plan(current_price: float, support_level: float, target_estimate: float) -> bool:
    """True when every input price is positive and finite"""
    return all(
        value is not None and math.isfinite(value) and value > 0
        for value in (current_price, support_level, target_estimate)
    )


def calculate_position_size(decision: EntryDecision, buy_discount: float,
                            params: EntryPlanParams = EntryPlanParams()) -> PositionSize:
    """
    Size the position from the decision and the entry discount

    Args:
        decision: BUY, HOLD or PASS
        buy_discount: Fraction the buy price sits below current price
        params: Sizing parameters

    Returns:
        PositionSize as a fraction of portfolio
    """
    if decision == EntryDecision.PASS:
        return PositionSize(percentage=0.0, rationale=_SIZE_RATIONALES[EntryDecision.PASS])
    if decision == EntryDecision.HOLD:
        return PositionSize(percentage=params.hold_position, rationale=_SIZE_RATIONALES[EntryDecision.HOLD])

    if buy_discount > params.large_discount:
        return PositionSize(percentage=params.large_position, rationale=_SIZE_RATIONALES["large"])
    if buy_discount > params.medium_discount:
        return PositionSize(percentage=params.medium_position, rationale=_SIZE_RATIONALES["medium"])
    return PositionSize(percentage=params.base_position, rationale=_SIZE_RATIONALES["base"])


def _time_horizon(ratio: float, params: EntryPlanParams) -> str:
    if ratio > params.long_horizon_ratio:
        return "6-12 months"
    if ratio < params.short_horizon_ratio:
        return "1-3 months"
    return "3-6 months"


def calculate_entry_plan(
    current_price: float,
    support_level: float,
    target_estimate: float,
    decision: Union[EntryDecision, str] = EntryDecision.BUY,
    params: EntryPlanParams = EntryPlanParams(),
) -> EntryPlan:
    """
    Calculate a complete long entry plan

    buy    = max(support, current * (1 - buy_proximity))
    stop   = min(buy * (1 - stop_loss_pct), support * support_margin)
    target = clamp(target_estimate, buy * (1 + target_pct_min), buy * (1 + target_pct_max))

    Args:
        current_price: Last traded price
        support_level: Nearest support price
        target_estimate: External price target (analyst or valuation)
        decision: BUY, HOLD or PASS from the screening layer
        params: Entry plan parameters

    Returns:
        EntryPlan with stop < buy < target

    Raises:
        EntryPlanValidationError: If any price is non-positive or not finite, or the
            decision is not a known label
    """
    _validate_price("current_price", current_price)
    _validate_price("support_level", support_level)
    _validate_price("target_estimate", target_estimate)
    decision = _validate_decision(decision)

    buy_price = max(support_level, current_price * (1 - params.buy_proximity))
    buy_discount = (current_price - buy_price) / current_price

    stop_price = min(buy_price * (1 - params.stop_loss_pct), support_level * params.support_margin)

    target_price = clamp(
        target_estimate,
        buy_price * (1 + params.target_pct_min),
        buy_price * (1 + params.target_pct_max),
    )

    risk_amount = buy_price - stop_price
    reward_amount = target_price - buy_price
    ratio = reward_amount / risk_amount

    return EntryPlan(
        buy_at=PricePoint(
            price=buy_price,
            rationale=BUY_RATIONALE,
            discount_from_current=buy_discount,
        ),
        stop_loss=PriceLevel(
            price=stop_price,
            percentage_from_buy=risk_amount / buy_price * 100,
            rationale=STOP_RATIONALE,
        ),
        target=PriceLevel(
            price=target_price,
            percentage_from_buy=reward_amount / buy_price * 100,
            rationale=TARGET_RATIONALE,
        ),
        position_size=calculate_position_size(decision, buy_discount, params),
        risk_reward=RiskReward(
            ratio=ratio,
            risk_amount=risk_amount,
            reward_amount=reward_amount,
        ),
        time_horizon=_time_horizon(ratio, params),
    )
