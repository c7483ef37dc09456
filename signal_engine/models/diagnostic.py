"""Data models for the stock decline diagnostic"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DiagnosticCategory(str, Enum):
    VOLUME = "volume"
    SECTOR = "sector"
    SMART_MONEY = "smart_money"
    TECHNICAL = "technical"
    VALUATION = "valuation"


class DiagnosticSeverity(str, Enum):
    RED = "red"
    YELLOW = "yellow"


class DiagnosticAction(str, Enum):
    """Overall recommendation from the flag decision table."""
    IMMEDIATE_SELL = "IMMEDIATE_SELL"    # 3+ red flags
    STRONG_SELL = "STRONG_SELL"          # 2 red + 2+ yellow, reduce ~50%
    TRIM = "TRIM"                        # 1-2 red flags
    HOLD = "HOLD"                        # No red flags


@dataclass(frozen=True)
class DiagnosticFlag:
    """A single triggered threshold check"""
    category: DiagnosticCategory
    severity: DiagnosticSeverity
    signal: str
    description: str
    action: str
    value: Optional[float] = None
    comparison: Optional[str] = None


@dataclass(frozen=True)
class CategoryCount:
    red: int = 0
    yellow: int = 0


@dataclass(frozen=True)
class FlagCounts:
    """Flag tallies overall and per category"""
    red: int
    yellow: int
    by_category: dict[DiagnosticCategory, CategoryCount]


@dataclass(frozen=True)
class StockDiagnosticResult:
    """Complete decline diagnostic for one stock"""
    symbol: str
    overall_action: DiagnosticAction
    red_flags: tuple[DiagnosticFlag, ...]
    yellow_flags: tuple[DiagnosticFlag, ...]
    flag_counts: FlagCounts
    risk_level: int
    summary: str
