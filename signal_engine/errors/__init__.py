"""
Error classification for the market signal engine.

Degenerate market data is handled locally by each calculator and never
raises. Only the failures below surface to callers: an entry plan requested
with unusable prices, and configuration that fails validation at load time.
"""

from .validation import (
    SignalEngineError,
    ValidationFailureError,
    EntryPlanValidationError,
    ConfigurationError,
)

__all__ = [
    "SignalEngineError",
    "ValidationFailureError",
    "EntryPlanValidationError",
    "ConfigurationError",
]
