"""Integration tests for the complete scoring and diagnostic pipeline."""

from dataclasses import replace

import pytest

from signal_engine.data.models import (
    DiagnosticInput,
    InvestorFlow,
    Rankings,
    RegimeSummary,
    SectorSummary,
    SmartMoneySummary,
    StockVolume,
    TechnicalSummary,
    ValuationSummary,
)
from signal_engine.engine import MarketSignalEngine
from signal_engine.insights.generator import ACTION_WAIT
from signal_engine.models.diagnostic import DiagnosticAction, DiagnosticCategory
from signal_engine.models.volume import ConvictionLevel, VolumeHealthStatus


@pytest.fixture
def engine():
    return MarketSignalEngine("SET")


@pytest.fixture
def selloff_rows():
    """Session where heavy volume sits in a handful of losers"""
    heavy = [StockVolume(symbol=f"H{i}", volume=6000.0, change=-3.0) for i in range(5)]
    light = [StockVolume(symbol=f"L{i}", volume=500.0, change=0.4) for i in range(25)]
    return heavy + light


class TestSelloffPipeline:
    """A distressed stock in a distressed market."""

    def test_volume_layer(self, engine, selloff_rows):
        analysis = engine.analyze_volume(selloff_rows, current_volume=11000, average_volume=45000)

        assert analysis.health.health_status == VolumeHealthStatus.ANEMIC
        assert analysis.vwad.conviction == ConvictionLevel.BEARISH
        assert analysis.concentration.concentration >= 40
        assert engine.volume_recommendation(analysis).action == ACTION_WAIT

    def test_diagnostic_layer(self, engine, selloff_rows):
        analysis = engine.analyze_volume(selloff_rows, current_volume=11000, average_volume=45000)
        data = DiagnosticInput(
            symbol="H0",
            volume=analysis,
            smart_money=SmartMoneySummary(
                score=25,
                foreign=InvestorFlow(today_net=-750, trend_5day=-900),
                institution=InvestorFlow(today_net=-220),
            ),
            technical=TechnicalSummary(
                trend_5d=-4.0,
                trend_20d=-9.5,
                week52_position=8,
                is_top_loser=True,
                relative_volume=6.0,
            ),
            rankings=Rankings(top_losers=("H0",), top_volume=("H0",)),
            sector=SectorSummary(momentum="Significant Lag", signal="Exit", confidence=82),
            regime=RegimeSummary(regime="Risk-Off", confirmed=True),
            valuation=ValuationSummary(stock_pe=31, sector_pe=18, historical_pe=20),
        )
        result = engine.diagnose(data)

        assert result.overall_action == DiagnosticAction.IMMEDIATE_SELL
        assert result.risk_level == 100
        assert [flag.signal for flag in result.red_flags] == [
            "Laggard Sector",
            "Sector Exit Signal",
            "Risk-Off Market",
            "Foreign Strong Sell",
            "Negative Cumulative Flow",
            "Negative Short & Long Trend",
        ]
        counts = result.flag_counts.by_category
        assert counts[DiagnosticCategory.VALUATION].yellow == 2
        assert counts[DiagnosticCategory.VOLUME].yellow == 3
        assert result.summary.startswith("H0: IMMEDIATE_SELL - Critical warning!")


class TestAccumulationPipeline:
    """A healthy stock worth planning an entry for."""

    def test_entry_from_history(self, bar_factory):
        engine = MarketSignalEngine(overrides={"levels": {"lookback": 2}})
        closes = [50, 48, 46, 48, 50, 52, 50, 48, 46.3, 48, 50, 52, 54, 52, 51]
        plan = engine.entry_plan_from_history(bar_factory(closes), target_estimate=62)

        assert plan is not None
        assert plan.stop_loss.price < plan.buy_at.price < plan.target.price
        assert plan.time_horizon in {"1-3 months", "3-6 months", "6-12 months"}

    def test_hold_verdict_with_entry_plan(self, engine, market_rows, clean_input):
        analysis = engine.analyze_volume(market_rows, 47000, 45000)
        result = engine.diagnose(replace(clean_input, volume=analysis))
        plan = engine.entry_plan(48.75, 47.0, 60.0)

        assert result.overall_action == DiagnosticAction.HOLD
        assert plan.position_size.percentage > 0
