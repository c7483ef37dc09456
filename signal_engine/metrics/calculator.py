"""Volume metrics calculator coordinating the individual volume calculations"""

from collections.abc import Mapping, Sequence
from typing import Optional

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import StockVolume
from ..models.volume import (
    ConcentrationData,
    VolumeAnalysisData,
    VolumeHealthData,
    VolumeTrend,
    VWADData,
)
from .trend import detect_trend
from .volume import (
    calculate_concentration,
    calculate_relative_volume,
    calculate_volume_health,
    calculate_vwad,
    identify_volume_leaders,
)


class VolumeMetricsCalculator:
    """
    Binds the volume calculations to one configuration

    Holds no state beyond the immutable configuration, so a single instance
    can serve any number of concurrent callers.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()

    def health(self, current_volume: float, average_volume: Optional[float] = None,
               previous_volume: Optional[float] = None) -> VolumeHealthData:
        """Volume health against an observed or fallback average"""
        return calculate_volume_health(
            current_volume,
            average_volume,
            previous_volume,
            health_params=self.config.health,
            volume_params=self.config.volume,
            baseline=self.config.baseline,
        )

    def vwad(self, rows: Sequence[StockVolume]) -> VWADData:
        return calculate_vwad(rows, self.config.vwad)

    def concentration(self, rows: Sequence[StockVolume]) -> ConcentrationData:
        return calculate_concentration(rows, self.config.concentration)

    def relative_volume(self, stock_volume: float, stock_average: Optional[float] = None) -> float:
        """Relative volume, using the fallback stock average when none is given"""
        if stock_average is None:
            stock_average = self.config.baseline.stock_average_volume
        return calculate_relative_volume(stock_volume, stock_average, self.config.volume)

    def trend(self, history: Sequence[float]) -> VolumeTrend:
        return detect_trend(history, self.config.trend)

    def analyze(
        self,
        rows: Sequence[StockVolume],
        current_volume: float,
        average_volume: Optional[float] = None,
        previous_volume: Optional[float] = None,
        stock_averages: Optional[Mapping[str, float]] = None,
    ) -> VolumeAnalysisData:
        """
        Calculate the complete volume analysis for one market snapshot

        Args:
            rows: Ranking rows (symbol, volume, change)
            current_volume: Today's total market volume
            average_volume: Market average, None to use the fallback baseline
            previous_volume: Previous-period market volume for the trend
            stock_averages: Per-symbol average volumes for relative volume

        Returns:
            VolumeAnalysisData with health, VWAD, concentration and leaders
        """
        return VolumeAnalysisData(
            health=self.health(current_volume, average_volume, previous_volume),
            vwad=self.vwad(rows),
            concentration=self.concentration(rows),
            leaders=identify_volume_leaders(
                rows,
                stock_averages,
                params=self.config.volume,
                baseline=self.config.baseline,
            ),
        )
