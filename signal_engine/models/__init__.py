"""
Result models module.

Immutable value objects produced by the engine. Every result is created fresh
per call and carries no timestamps, so identical inputs yield equal results.
"""
