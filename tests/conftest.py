"""Pytest configuration and shared fixtures."""

import pytest
import structlog

from signal_engine.config.defaults import get_default_config
from signal_engine.data.models import (
    DiagnosticInput,
    InvestorFlow,
    PriceBar,
    Rankings,
    SmartMoneySummary,
    StockVolume,
    TechnicalSummary,
)
from signal_engine.metrics.calculator import VolumeMetricsCalculator


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore structlog defaults so tests that configure logging stay isolated."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def default_config():
    """Default engine configuration."""
    return get_default_config()


@pytest.fixture
def ranking_rows() -> list[StockVolume]:
    """Ranking snapshot with mixed gainers, losers and a flat stock."""
    return [
        StockVolume(symbol="PTT", volume=5200.0, change=2.1),
        StockVolume(symbol="AOT", volume=4100.0, change=-1.4),
        StockVolume(symbol="KBANK", volume=3300.0, change=0.8),
        StockVolume(symbol="CPALL", volume=2500.0, change=-0.5),
        StockVolume(symbol="ADVANC", volume=1900.0, change=0.0),
        StockVolume(symbol="SCB", volume=1200.0, change=1.2),
    ]


@pytest.fixture
def flat_universe() -> list[StockVolume]:
    """Thirty stocks trading identical volume."""
    return [StockVolume(symbol=f"S{i:02d}", volume=1000.0, change=0.5) for i in range(30)]


@pytest.fixture
def market_rows() -> list[StockVolume]:
    """Balanced 30-stock universe: 16 gainers, 10 losers, 4 unchanged."""
    changes = [1.0] * 16 + [-1.0] * 10 + [0.0] * 4
    return [StockVolume(symbol=f"M{i:02d}", volume=1000.0, change=change) for i, change in enumerate(changes)]


@pytest.fixture
def healthy_analysis(market_rows):
    """Volume analysis for a normal trading day."""
    return VolumeMetricsCalculator().analyze(market_rows, current_volume=45000.0, average_volume=45000.0)


def make_bars(closes, spread=1.0, start_day=1):
    """Build daily bars around a close series with a fixed high/low spread."""
    return [
        PriceBar(
            date=f"2024-01-{start_day + i:02d}",
            open=close,
            high=close + spread,
            low=close - spread,
            close=close,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def bar_factory():
    """Factory for bar series built from closes."""
    return make_bars


@pytest.fixture
def swing_bars():
    """Swing series: lows at bars 2 and 8 (15.0, 15.2), highs at bars 5 and 12 (23, 25), last close 21."""
    return make_bars([20, 18, 16, 18, 20, 22, 20, 18, 16.2, 18, 20, 22, 24, 22, 21])


@pytest.fixture
def clean_input(healthy_analysis) -> DiagnosticInput:
    """Diagnostic input that triggers no rule."""
    return DiagnosticInput(
        symbol="PTT",
        volume=healthy_analysis,
        smart_money=SmartMoneySummary(
            score=65.0,
            foreign=InvestorFlow(today_net=120.0, trend_5day=300.0),
            institution=InvestorFlow(today_net=40.0, trend_5day=80.0),
        ),
        technical=TechnicalSummary(
            trend_5d=1.2,
            trend_20d=3.4,
            week52_position=62.0,
            is_in_any_ranking=True,
            relative_volume=1.1,
        ),
        rankings=Rankings(top_volume=("PTT", "AOT")),
    )
