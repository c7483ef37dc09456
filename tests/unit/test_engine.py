"""Unit tests for the market signal engine coordinator."""

from pathlib import Path

import pytest

from signal_engine.config.defaults import get_default_config
from signal_engine.diagnostic.rules import DEFAULT_RULES
from signal_engine.engine import MarketSignalEngine
from signal_engine.errors import ConfigurationError, EntryPlanValidationError
from signal_engine.insights.generator import ACTION_HOLD
from signal_engine.models.diagnostic import DiagnosticAction
from signal_engine.models.volume import BaselineSource, VolumeTrend


class TestEngineInitialization:
    """Test engine construction."""

    def test_default_market(self) -> None:
        engine = MarketSignalEngine()

        assert engine.market_id == "SET"
        assert engine.config.baseline.market_average_volume == 45000
        assert engine.rules == DEFAULT_RULES

    def test_explicit_config(self) -> None:
        config = get_default_config()
        engine = MarketSignalEngine(config=config)
        assert engine.config is config

    def test_market_config_dir(self, tmp_path: Path) -> None:
        (tmp_path / "markets.yaml").write_text(
            "markets:\n  XYZ:\n    baseline:\n      market_average_volume: 800.0\n"
        )
        engine = MarketSignalEngine("XYZ", config_dir=tmp_path)
        assert engine.config.baseline.market_average_volume == 800

    def test_invalid_overrides(self) -> None:
        with pytest.raises(ConfigurationError):
            MarketSignalEngine(overrides={"volume": {"leader_limit": -1}})

    def test_custom_rule_subset(self) -> None:
        engine = MarketSignalEngine(rules=DEFAULT_RULES[:3])
        assert len(engine.rules) == 3


class TestEngineOperations:
    """Test engine delegation to the calculators."""

    @pytest.fixture
    def engine(self) -> MarketSignalEngine:
        return MarketSignalEngine()

    def test_volume_pipeline(self, engine, market_rows) -> None:
        analysis = engine.analyze_volume(market_rows, current_volume=45000)

        assert analysis.health.baseline_source == BaselineSource.FALLBACK
        assert engine.volume_insights(analysis)[0].startswith("Normal volume (50/100)")
        assert engine.volume_recommendation(analysis).action == ACTION_HOLD

    def test_volume_trend(self, engine) -> None:
        assert engine.volume_trend([40000, 45000, 50000, 55000, 60000]) == VolumeTrend.UP

    def test_price_levels(self, swing_bars) -> None:
        engine = MarketSignalEngine(overrides={"levels": {"lookback": 2}})
        levels = engine.support_resistance(swing_bars)

        assert levels.nearest_support == 15
        assert engine.suggested_entry(levels) == pytest.approx(15.3)

    def test_trade_levels(self, engine, bar_factory) -> None:
        bars = bar_factory([100] * 15, spread=2.0)
        atr = engine.atr(bars)
        stop = engine.stop_loss(100, atr, support_level=95)
        targets = engine.take_profit(100, stop)

        assert atr == pytest.approx(4.0)
        assert stop == pytest.approx(93.1)
        assert targets.tp1 == pytest.approx(100 + 6.9 * 1.5)

    def test_diagnose(self, engine, clean_input) -> None:
        assert engine.diagnose(clean_input).overall_action == DiagnosticAction.HOLD

    def test_entry_plan(self, engine) -> None:
        plan = engine.entry_plan(100, 95, 130)
        assert plan.stop_loss.price < plan.buy_at.price < plan.target.price

    def test_entry_plan_rejects_bad_price(self, engine) -> None:
        with pytest.raises(EntryPlanValidationError):
            engine.entry_plan(-1, 95, 130)

    def test_entry_plan_from_history(self, swing_bars) -> None:
        engine = MarketSignalEngine(overrides={"levels": {"lookback": 2}})
        plan = engine.entry_plan_from_history(swing_bars, target_estimate=26)

        # Last close 21, nearest support 15
        assert plan.buy_at.price == pytest.approx(21 * 0.98)

    def test_entry_plan_without_support(self, engine, bar_factory) -> None:
        assert engine.entry_plan_from_history([], target_estimate=26) is None
        assert engine.entry_plan_from_history(bar_factory([10, 11, 12]), target_estimate=26) is None
