"""
Validation error classifications.

These exceptions represent inputs that cannot produce a result which is safe
to present, so the engine fails fast instead of clamping.
"""

from typing import Any, Optional, Dict


class SignalEngineError(Exception):
    """Base class for all errors raised by the signal engine."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ValidationFailureError(SignalEngineError):
    """Caller-supplied input failed validation."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class EntryPlanValidationError(ValidationFailureError):
    """Entry plan requested with a non-positive or non-finite price."""


class ConfigurationError(SignalEngineError):
    """Merged configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
