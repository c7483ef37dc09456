"""Default configuration parameters for the market signal engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthParams:
    """Volume health scoring parameters."""
    score_multiplier: float = 50.0                   # ratio 1.0 -> score 50
    neutral_score: int = 50                          # Used when no average is known

    # Status bands (lower bounds)
    explosive_min: int = 90
    strong_min: int = 70
    normal_min: int = 30


@dataclass(frozen=True)
class VolumeParams:
    """Volume trend and relative volume parameters."""
    trend_change_pct: float = 10.0                   # Current vs previous % change band
    neutral_relative_volume: float = 1.0             # Used when no stock average is known
    unusual_relative_volume: float = 2.0
    extreme_relative_volume: float = 3.0
    light_relative_volume: float = 0.5
    very_light_relative_volume: float = 0.3
    leader_limit: int = 5


@dataclass(frozen=True)
class VWADParams:
    """Volume-weighted advance/decline conviction cutoffs."""
    bullish_min: float = 30.0
    bearish_max: float = -30.0


@dataclass(frozen=True)
class ConcentrationParams:
    """Market concentration parameters."""
    top_n: int = 5                                   # Leaders counted in the numerator
    universe_size: int = 30                          # Stocks counted in the denominator
    risky_min: float = 40.0
    normal_min: float = 25.0


@dataclass(frozen=True)
class TrendParams:
    """Linear-regression trend parameters."""
    slope_threshold_pct: float = 5.0                 # Slope as % of series mean


@dataclass(frozen=True)
class LevelParams:
    """Support/resistance detection parameters."""
    lookback: int = 5                                # Pivot half-window in bars
    grouping_threshold: float = 0.02                 # Relative distance to join a group
    max_levels: int = 5
    strong_touches: int = 3
    moderate_touches: int = 2
    entry_premium: float = 0.02                      # Suggested entry above support


@dataclass(frozen=True)
class ATRParams:
    """ATR and derived stop/target parameters."""
    period: int = 14
    multiplier: float = 2.0
    risk_pct: float = 0.08                           # Percentage stop fallback
    support_margin: float = 0.98                     # Stop placed 2% below support
    take_profit_multiples: tuple[float, float, float] = (1.5, 3.0, 5.0)


@dataclass(frozen=True)
class InsightParams:
    """Insight emission and recommendation scoring parameters."""
    high_ratio: float = 1.5
    low_ratio: float = 0.5
    skew_pct: float = 60.0

    # Recommendation points
    strong_health_min: int = 70
    normal_health_min: int = 40
    strong_health_points: int = 40
    normal_health_points: int = 20
    bullish_points: int = 40
    healthy_concentration_points: int = 20

    # Action bands
    strong_buy_min: int = 70
    moderate_buy_min: int = 50
    hold_min: int = 30


@dataclass(frozen=True)
class DiagnosticThresholds:
    """Thresholds for the decline diagnostic battery."""
    volume_health_threshold: float = 30.0
    vwad_bearish_threshold: float = -30.0
    concentration_threshold: float = 40.0
    relative_volume_low_threshold: float = 0.5
    strong_foreign_sell_threshold: float = 500.0     # Net sell magnitude (millions)
    institution_sell_threshold: float = 100.0        # Net sell magnitude (millions)
    smart_money_score_threshold: float = 40.0
    cumulative_flow_threshold: float = -200.0
    sector_exit_confidence: float = 70.0
    week52_position_low_threshold: float = 20.0
    pe_overvaluation_threshold: float = 1.3          # Multiple of sector/historical P/E

    # Decision table and risk weights
    immediate_sell_reds: int = 3
    strong_sell_reds: int = 2
    strong_sell_yellows: int = 2
    red_risk_weight: int = 25
    yellow_risk_weight: int = 10


@dataclass(frozen=True)
class EntryPlanParams:
    """Entry plan pricing and sizing parameters."""
    buy_proximity: float = 0.02
    stop_loss_pct: float = 0.12
    support_margin: float = 0.98
    target_pct_min: float = 0.20
    target_pct_max: float = 0.25

    # Position sizing
    large_discount: float = 0.05
    medium_discount: float = 0.03
    large_position: float = 0.10
    medium_position: float = 0.08
    base_position: float = 0.05
    hold_position: float = 0.03

    # Time horizon bands on the reward/risk ratio
    long_horizon_ratio: float = 3.0
    short_horizon_ratio: float = 1.5


@dataclass(frozen=True)
class BaselineParams:
    """Fallback baselines used when no observed average is supplied."""
    market_average_volume: float = 45000.0           # Millions, 30-day market average
    stock_average_volume: float = 1000.0             # Millions, 30-day per-stock average


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    health: HealthParams
    volume: VolumeParams
    vwad: VWADParams
    concentration: ConcentrationParams
    trend: TrendParams
    levels: LevelParams
    atr: ATRParams
    insights: InsightParams
    diagnostic: DiagnosticThresholds
    entry_plan: EntryPlanParams
    baseline: BaselineParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        health=HealthParams(),
        volume=VolumeParams(),
        vwad=VWADParams(),
        concentration=ConcentrationParams(),
        trend=TrendParams(),
        levels=LevelParams(),
        atr=ATRParams(),
        insights=InsightParams(),
        diagnostic=DiagnosticThresholds(),
        entry_plan=EntryPlanParams(),
        baseline=BaselineParams(),
    )
