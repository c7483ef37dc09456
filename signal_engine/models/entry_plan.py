"""Data models for entry plans"""

from dataclasses import dataclass
from enum import Enum


class EntryDecision(str, Enum):
    BUY = "BUY"
    HOLD = "HOLD"
    PASS = "PASS"


@dataclass(frozen=True)
class PricePoint:
    price: float
    rationale: str
    discount_from_current: float = 0.0     # Fraction below current price


@dataclass(frozen=True)
class PriceLevel:
    price: float
    percentage_from_buy: float              # Percent distance from buy price, always positive
    rationale: str


@dataclass(frozen=True)
class PositionSize:
    percentage: float                       # Fraction of portfolio, 0-1
    rationale: str


@dataclass(frozen=True)
class RiskReward:
    ratio: float
    risk_amount: float
    reward_amount: float

    @property
    def label(self) -> str:
        """Ratio formatted as '1:<ratio>' with one decimal."""
        return f"1:{self.ratio:.1f}"


@dataclass(frozen=True)
class EntryPlan:
    """Concrete long trade plan"""
    buy_at: PricePoint
    stop_loss: PriceLevel
    target: PriceLevel
    position_size: PositionSize
    risk_reward: RiskReward
    time_horizon: str
