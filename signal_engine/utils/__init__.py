"""
Utility functions module.

Numeric helpers shared across the metric calculators.

Rounding Semantics:
- Scores and ratios round half toward positive infinity
- Built-in ``round`` is never used for published values
"""
