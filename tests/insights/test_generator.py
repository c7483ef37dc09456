"""Tests for volume insights and trading recommendation"""

import pytest

from signal_engine.data.models import StockVolume
from signal_engine.insights.generator import (
    ACTION_HOLD,
    ACTION_MODERATE_BUY,
    ACTION_STRONG_BUY,
    ACTION_WAIT,
    generate_volume_insights,
    get_volume_trading_recommendation,
)
from signal_engine.metrics.calculator import VolumeMetricsCalculator


@pytest.fixture
def calculator():
    return VolumeMetricsCalculator()


@pytest.fixture
def bullish_analysis(calculator, flat_universe):
    """Explosive, rising, all-gainer session"""
    return calculator.analyze(flat_universe, current_volume=90000, average_volume=45000,
                              previous_volume=60000, stock_averages={"S00": 400, "S01": 400})


@pytest.fixture
def bearish_analysis(calculator):
    """Thin, falling, all-loser session concentrated in five names"""
    rows = [StockVolume(symbol=f"L{i}", volume=800 - i * 100, change=-2.0) for i in range(5)]
    return calculator.analyze(rows, current_volume=9000, average_volume=45000, previous_volume=12000)


class TestVolumeInsights:
    """Test ordered insight generation"""

    def test_normal_session(self, healthy_analysis):
        insights = generate_volume_insights(healthy_analysis)

        assert insights == [
            "Normal volume (50/100): typical market participation",
            "Neutral conviction (VWAD: 20.0): volume balanced between gainers and losers",
            "Healthy concentration (16.7%): volume well diversified across many stocks",
            "Top volume: M00 (1.0B)",
        ]

    def test_bullish_session(self, bullish_analysis):
        insights = generate_volume_insights(bullish_analysis)

        assert insights[0] == "Explosive volume (100/100): strong institutional participation detected"
        assert insights[1] == "Volume is 200% of 30-day average - unusual activity"
        assert insights[2] == "Volume trending up - increasing market interest"
        assert insights[3].startswith("Bullish conviction (VWAD: 100")
        assert insights[4] == "100% of volume in gainers - strong buying pressure"
        assert insights[-1] == "2 stocks with 2x+ unusual volume"

    def test_bearish_session(self, bearish_analysis):
        insights = generate_volume_insights(bearish_analysis)

        assert insights[0] == "Anemic volume (10/100): low participation, lacks conviction"
        assert "Volume is 20% of 30-day average - light trading" in insights
        assert "Volume trending down - waning participation" in insights
        assert "100% of volume in losers - strong selling pressure" in insights
        assert any(insight.startswith("Risky concentration (100.0%)") for insight in insights)
        assert "Top volume: L0 (800.0M)" in insights

    def test_category_order(self, bearish_analysis):
        """Test health insights precede conviction, concentration and leaders"""
        insights = generate_volume_insights(bearish_analysis)
        prefixes = [insight.split(" ")[0] for insight in insights]

        assert prefixes.index("Anemic") < prefixes.index("Bearish") < prefixes.index("Risky")
        assert prefixes.index("Risky") < prefixes.index("Top")

    def test_no_leaders(self, calculator):
        analysis = calculator.analyze([], current_volume=45000, average_volume=45000)
        insights = generate_volume_insights(analysis)

        assert not any(insight.startswith("Top volume") for insight in insights)


class TestTradingRecommendation:
    """Test weighted volume recommendation"""

    def test_strong_buy(self, bullish_analysis):
        recommendation = get_volume_trading_recommendation(bullish_analysis)

        assert recommendation.action == ACTION_STRONG_BUY
        assert recommendation.confidence == 100
        assert recommendation.reason == (
            "Strong volume participation, Bullish conviction - volume favors gainers, "
            "Healthy diversification"
        )

    def test_moderate_buy(self, calculator, market_rows):
        analysis = calculator.analyze(market_rows, current_volume=63000, average_volume=45000)
        recommendation = get_volume_trading_recommendation(analysis)

        assert recommendation.action == ACTION_MODERATE_BUY
        assert recommendation.confidence == 60

    def test_hold(self, healthy_analysis):
        recommendation = get_volume_trading_recommendation(healthy_analysis)

        assert recommendation.action == ACTION_HOLD
        assert recommendation.confidence == 40
        assert recommendation.reason == "Normal volume participation, Healthy diversification"

    def test_wait(self, bearish_analysis):
        recommendation = get_volume_trading_recommendation(bearish_analysis)

        assert recommendation.action == ACTION_WAIT
        assert recommendation.confidence == 0
        assert recommendation.reason == (
            "Weak volume participation, Bearish conviction - volume favors losers, "
            "Risky concentration in few stocks"
        )

    def test_confidence_bounded(self, bullish_analysis, bearish_analysis, healthy_analysis):
        for analysis in (bullish_analysis, bearish_analysis, healthy_analysis):
            assert 0 <= get_volume_trading_recommendation(analysis).confidence <= 100
