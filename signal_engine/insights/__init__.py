"""Human-readable insights and recommendations derived from volume metrics"""

from .generator import generate_volume_insights, get_volume_trading_recommendation

__all__ = ["generate_volume_insights", "get_volume_trading_recommendation"]
