"""Data models for volume metrics"""

from dataclasses import dataclass
from enum import Enum


class VolumeHealthStatus(str, Enum):
    """Volume health classification."""
    ANEMIC = "Anemic"
    NORMAL = "Normal"
    STRONG = "Strong"
    EXPLOSIVE = "Explosive"


class VolumeTrend(str, Enum):
    """Trend direction of a series."""
    UP = "Up"
    DOWN = "Down"
    NEUTRAL = "Neutral"


class ConvictionLevel(str, Enum):
    """VWAD conviction."""
    BULLISH = "Bullish"
    BEARISH = "Bearish"
    NEUTRAL = "Neutral"


class ConcentrationLevel(str, Enum):
    """Concentration risk classification."""
    HEALTHY = "Healthy"
    NORMAL = "Normal"
    RISKY = "Risky"


class BaselineSource(str, Enum):
    """Provenance of an average used as a baseline."""
    OBSERVED = "observed"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class VolumeHealthData:
    """Today's volume measured against its average"""
    current_volume: float
    average_volume: float
    health_score: int
    health_status: VolumeHealthStatus
    trend: VolumeTrend
    baseline_source: BaselineSource = BaselineSource.OBSERVED


@dataclass(frozen=True)
class VWADData:
    """Volume-weighted advance/decline result"""
    vwad: float                 # -100 to +100, 2 decimals
    conviction: ConvictionLevel
    up_volume: float
    down_volume: float
    total_volume: float


@dataclass(frozen=True)
class ConcentrationData:
    """Share of volume held by the most active stocks"""
    top5_volume: float
    total_volume: float
    concentration: float        # 0-100, 2 decimals
    concentration_level: ConcentrationLevel


@dataclass(frozen=True)
class VolumeLeader:
    """A most-active stock with its relative volume"""
    symbol: str
    volume: float
    relative_volume: float
    price_change: float


@dataclass(frozen=True)
class VolumeAnalysisData:
    """Complete volume analysis consumed by insights and diagnostics"""
    health: VolumeHealthData
    vwad: VWADData
    concentration: ConcentrationData
    leaders: tuple[VolumeLeader, ...] = ()


@dataclass(frozen=True)
class VolumeRecommendation:
    """Weighted trading recommendation from volume metrics"""
    action: str
    reason: str
    confidence: int
