"""
Canonical input models for the market signal engine.

This module defines immutable data structures that represent the raw market
observations and the externally computed summaries (smart money, sector,
technical, valuation) handed to the engine by the data-acquisition layer.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..models.volume import VolumeAnalysisData


@dataclass(frozen=True)
class StockVolume:
    """One row of a ranking table."""
    symbol: str
    volume: float       # Traded value in millions
    change: float       # Price change percentage


@dataclass(frozen=True)
class PriceBar:
    """Daily OHLC bar."""
    date: str           # ISO date, sortable as text
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class InvestorFlow:
    """Net flow of one investor group (millions)."""
    today_net: float = 0.0
    trend_5day: float = 0.0         # 5-day cumulative net flow


@dataclass(frozen=True)
class SmartMoneySummary:
    """Smart money analysis computed by a sibling service."""
    score: float                    # 0-100, <40 bearish, >60 bullish
    foreign: InvestorFlow = field(default_factory=InvestorFlow)
    institution: InvestorFlow = field(default_factory=InvestorFlow)


@dataclass(frozen=True)
class SectorSummary:
    """Sector performance relative to the market."""
    momentum: str                   # e.g. 'Outperform', 'Underperform', 'Significant Lag'
    vs_market: float = 0.0          # Percentage points vs index
    signal: Optional[str] = None    # Rotation signal, e.g. 'Entry', 'Exit'
    confidence: float = 0.0         # Signal confidence 0-100


@dataclass(frozen=True)
class RegimeSummary:
    """Market regime context."""
    regime: str                     # 'Risk-On', 'Neutral', 'Risk-Off'
    confirmed: bool = False


@dataclass(frozen=True)
class TechnicalSummary:
    """Technical indicators for a single stock."""
    trend_5d: float
    trend_20d: float
    week52_position: float          # 0-100 position in the 52-week range
    is_top_loser: bool = False
    is_in_any_ranking: bool = False
    relative_volume: Optional[float] = None


@dataclass(frozen=True)
class ValuationSummary:
    """Valuation ratios for a single stock."""
    stock_pe: Optional[float] = None
    sector_pe: Optional[float] = None
    historical_pe: Optional[float] = None


@dataclass(frozen=True)
class Rankings:
    """Symbols present in each top ranking list."""
    top_gainers: tuple[str, ...] = ()
    top_losers: tuple[str, ...] = ()
    top_volume: tuple[str, ...] = ()
    top_value: tuple[str, ...] = ()

    def contains(self, symbol: str) -> bool:
        """True if symbol appears in any ranking list."""
        return any(
            symbol in ranking
            for ranking in (self.top_gainers, self.top_losers, self.top_volume, self.top_value)
        )


@dataclass(frozen=True)
class DiagnosticInput:
    """Everything the decline diagnostic inspects for one stock."""
    symbol: str
    volume: VolumeAnalysisData
    smart_money: SmartMoneySummary
    technical: TechnicalSummary
    rankings: Rankings = field(default_factory=Rankings)
    sector: Optional[SectorSummary] = None
    regime: Optional[RegimeSummary] = None
    valuation: Optional[ValuationSummary] = None
