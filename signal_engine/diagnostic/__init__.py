"""Stock decline diagnostic: rule battery, decision table and summary"""

from .engine import determine_overall_action, diagnose_stock, generate_diagnostic_summary
from .rules import DEFAULT_RULES, DiagnosticRule, evaluate_rule

__all__ = [
    "DEFAULT_RULES",
    "DiagnosticRule",
    "evaluate_rule",
    "determine_overall_action",
    "diagnose_stock",
    "generate_diagnostic_summary",
]
