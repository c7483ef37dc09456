"""Risk-based trade planning"""

from .entry_plan import calculate_entry_plan, should_show_entry_plan

__all__ = ["calculate_entry_plan", "should_show_entry_plan"]
