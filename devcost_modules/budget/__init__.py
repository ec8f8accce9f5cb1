"""
Budget Module (``devcost_modules.budget``).

Responsibility
--------------
Budget planning glue: rule-threshold configuration for the budget
analysis engine and YAML-backed starter templates per project type.
The analysis itself lives in ``devcost_engines.budget_analysis``.
"""

from devcost_modules.budget.config import BudgetAnalysisConfig
from devcost_modules.budget.templates import (
    available_template_types,
    generate_budget_template,
)

__all__ = [
    "BudgetAnalysisConfig",
    "available_template_types",
    "generate_budget_template",
]
