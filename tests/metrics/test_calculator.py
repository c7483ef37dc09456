"""Tests for the volume metrics calculator"""

from signal_engine.config.loader import ConfigLoader
from signal_engine.metrics.calculator import VolumeMetricsCalculator
from signal_engine.models.volume import (
    BaselineSource,
    ConcentrationLevel,
    ConvictionLevel,
    VolumeHealthStatus,
    VolumeTrend,
)


class TestVolumeMetricsCalculator:
    """Test calculator bound to a configuration"""

    def test_complete_analysis(self, market_rows):
        calculator = VolumeMetricsCalculator()
        analysis = calculator.analyze(market_rows, current_volume=45000, average_volume=45000,
                                      previous_volume=40000)

        assert analysis.health.health_score == 50
        assert analysis.health.health_status == VolumeHealthStatus.NORMAL
        assert analysis.health.trend == VolumeTrend.UP
        assert analysis.vwad.vwad == 20
        assert analysis.vwad.conviction == ConvictionLevel.NEUTRAL
        assert analysis.concentration.concentration == 16.67
        assert analysis.concentration.concentration_level == ConcentrationLevel.HEALTHY
        assert len(analysis.leaders) == 5

    def test_fallback_average_flagged(self, market_rows):
        analysis = VolumeMetricsCalculator().analyze(market_rows, current_volume=45000)
        assert analysis.health.baseline_source == BaselineSource.FALLBACK

    def test_relative_volume_fallback(self):
        calculator = VolumeMetricsCalculator()

        assert calculator.relative_volume(2000) == 2
        assert calculator.relative_volume(2000, 500) == 4

    def test_trend_from_history(self):
        calculator = VolumeMetricsCalculator()
        assert calculator.trend([60000, 55000, 50000, 45000, 40000]) == VolumeTrend.DOWN

    def test_market_config_changes_baseline(self, market_rows):
        """Test a smaller market scores against its own fallback average"""
        config = ConfigLoader.create().load("MAI")
        analysis = VolumeMetricsCalculator(config).analyze(market_rows, current_volume=1500)

        assert analysis.health.average_volume == 1500
        assert analysis.health.health_score == 50

    def test_analysis_is_deterministic(self, ranking_rows):
        calculator = VolumeMetricsCalculator()
        first = calculator.analyze(ranking_rows, 52000, 45000, 48000)
        second = calculator.analyze(ranking_rows, 52000, 45000, 48000)

        assert first == second
