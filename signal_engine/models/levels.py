"""Data models for support/resistance levels"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LevelType(str, Enum):
    SUPPORT = "support"
    RESISTANCE = "resistance"


class LevelStrength(str, Enum):
    WEAK = "weak"
    MODERATE = "moderate"
    STRONG = "strong"


class PivotType(str, Enum):
    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class PivotPoint:
    """Local high or low found in a price series"""
    price: float
    date: str
    type: PivotType


@dataclass(frozen=True)
class SupportResistanceLevel:
    """Grouped price level with its touch count"""
    price: float
    type: LevelType
    strength: LevelStrength
    touches: int
    last_touch_date: Optional[str] = None


@dataclass(frozen=True)
class SupportResistanceLevels:
    """Support levels (nearest first, descending) and resistance levels (ascending)"""
    support: tuple[SupportResistanceLevel, ...] = ()
    resistance: tuple[SupportResistanceLevel, ...] = ()

    @property
    def nearest_support(self) -> Optional[float]:
        """Price of the closest support below the last close, None if none."""
        return self.support[0].price if self.support else None

    @property
    def nearest_resistance(self) -> Optional[float]:
        """Price of the closest resistance above the last close, None if none."""
        return self.resistance[0].price if self.resistance else None


@dataclass(frozen=True)
class TakeProfitLevels:
    """Take-profit ladder at fixed risk multiples"""
    tp1: float
    tp2: float
    tp3: float
