"""
Input data contracts module.

Immutable shapes for the raw observations and external summaries the engine
consumes. Optional fields use ``None`` for "not available".
"""
