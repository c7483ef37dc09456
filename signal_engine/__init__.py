"""
Signal Engine - Market Signal Scoring & Diagnostic Engine

Pure, stateless calculations that turn raw trading, volume and investor-flow
observations into classified health scores, conviction signals,
concentration risk, decline diagnostics and concrete entry plans.
"""

__version__ = "0.1.0"
__author__ = "Signal Engine Team"
