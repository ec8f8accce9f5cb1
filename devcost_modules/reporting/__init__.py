"""
Reporting Module (``devcost_modules.reporting``).

Responsibility
--------------
Baseline statement reference data, treatment scenario comparison and
JSON-ready rendering of results.
"""

from devcost_modules.reporting.comparison import (
    BalanceSheetImpact,
    FinancialComparison,
    FinancialDifference,
    FinancialScenario,
    compare_scenarios,
)
from devcost_modules.reporting.config import ReportingConfig
from devcost_modules.reporting.render import render_to_dict
from devcost_modules.reporting.sample import load_sample_statement

__all__ = [
    "BalanceSheetImpact",
    "FinancialComparison",
    "FinancialDifference",
    "FinancialScenario",
    "ReportingConfig",
    "compare_scenarios",
    "load_sample_statement",
    "render_to_dict",
]
