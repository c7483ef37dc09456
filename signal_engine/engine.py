"""
Main engine coordinator.

Binds every calculation to one validated market configuration and exposes
them behind a single object:
Raw Observations → Metrics → Insights / Diagnostic Flags → Entry Plan
"""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .data.models import DiagnosticInput, PriceBar, StockVolume
from .diagnostic.engine import diagnose_stock
from .diagnostic.rules import DEFAULT_RULES, DiagnosticRule
from .insights.generator import generate_volume_insights, get_volume_trading_recommendation
from .metrics.atr import calculate_atr, calculate_stop_loss, calculate_take_profit_levels
from .metrics.calculator import VolumeMetricsCalculator
from .metrics.levels import calculate_support_resistance, suggest_entry_point
from .models.diagnostic import StockDiagnosticResult
from .models.entry_plan import EntryDecision, EntryPlan
from .models.levels import SupportResistanceLevels, TakeProfitLevels
from .models.volume import VolumeAnalysisData, VolumeRecommendation, VolumeTrend
from .planning.entry_plan import calculate_entry_plan

logger = structlog.get_logger(__name__)


class MarketSignalEngine:
    """
    Main coordinator for the market signal scoring and diagnostic engine.

    The engine keeps only its immutable configuration, so one instance per
    market can be shared across callers.
    """

    def __init__(
        self,
        market_id: str = "SET",
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        config: Optional[DefaultConfig] = None,
        rules: Sequence[DiagnosticRule] = DEFAULT_RULES,
    ) -> None:
        """Initialize the engine with a market configuration."""
        self.market_id = market_id

        if config is None:
            loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
            config = loader.load(market_id, overrides)

        self.config = config
        self.rules = tuple(rules)
        self.volume_calculator = VolumeMetricsCalculator(config)

        logger.info("Market signal engine initialized", market_id=market_id, rules=len(self.rules))

    # Volume

    def analyze_volume(
        self,
        rows: Sequence[StockVolume],
        current_volume: float,
        average_volume: Optional[float] = None,
        previous_volume: Optional[float] = None,
        stock_averages: Optional[Mapping[str, float]] = None,
    ) -> VolumeAnalysisData:
        """Complete volume analysis for one market snapshot."""
        return self.volume_calculator.analyze(
            rows, current_volume, average_volume, previous_volume, stock_averages
        )

    def volume_trend(self, history: Sequence[float]) -> VolumeTrend:
        return self.volume_calculator.trend(history)

    def volume_insights(self, analysis: VolumeAnalysisData) -> list[str]:
        return generate_volume_insights(analysis, self.config.insights, self.config.volume)

    def volume_recommendation(self, analysis: VolumeAnalysisData) -> VolumeRecommendation:
        return get_volume_trading_recommendation(analysis, self.config.insights)

    # Price levels

    def support_resistance(self, bars: Sequence[PriceBar]) -> SupportResistanceLevels:
        return calculate_support_resistance(bars, self.config.levels)

    def atr(self, bars: Sequence[PriceBar]) -> float:
        return calculate_atr(bars, self.config.atr.period)

    def suggested_entry(self, levels: SupportResistanceLevels) -> Optional[float]:
        return suggest_entry_point(levels.support, self.config.levels.entry_premium)

    def stop_loss(self, entry_price: float, atr: float, support_level: Optional[float] = None) -> float:
        return calculate_stop_loss(entry_price, atr, support_level, self.config.atr)

    def take_profit(self, entry_price: float, stop_loss: float) -> TakeProfitLevels:
        return calculate_take_profit_levels(entry_price, stop_loss, self.config.atr)

    # Diagnostic and planning

    def diagnose(self, data: DiagnosticInput) -> StockDiagnosticResult:
        """Run the decline diagnostic battery for one stock."""
        return diagnose_stock(data, self.config.diagnostic, self.rules)

    def entry_plan(
        self,
        current_price: float,
        support_level: float,
        target_estimate: float,
        decision: Union[EntryDecision, str] = EntryDecision.BUY,
    ) -> EntryPlan:
        """
        Build an entry plan.

        Raises:
            EntryPlanValidationError: If any price is non-positive
        """
        return calculate_entry_plan(
            current_price, support_level, target_estimate, decision, self.config.entry_plan
        )

    def entry_plan_from_history(
        self,
        bars: Sequence[PriceBar],
        target_estimate: float,
        decision: Union[EntryDecision, str] = EntryDecision.BUY,
    ) -> Optional[EntryPlan]:
        """
        Build an entry plan using the nearest detected support.

        Returns:
            EntryPlan, or None when history is empty or no support lies
            below the last close
        """
        if not bars:
            return None

        levels = self.support_resistance(bars)
        if levels.nearest_support is None:
            logger.debug("No support below last close, entry plan skipped",
                         market_id=self.market_id, bars=len(bars))
            return None

        return self.entry_plan(bars[-1].close, levels.nearest_support, target_estimate, decision)
