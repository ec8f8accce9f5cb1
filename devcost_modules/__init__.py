"""
Devcost Modules.

Thin orchestration layers over the devcost kernel and engines.

Modules:
- Projects: project form validation and thresholds
- Budget: budget rule configuration and starter templates
- Reporting: baseline statement, scenario comparison, rendering
- Decision: the AccountingDecisionService facade

Actual calculation logic lives in the engines.
"""

from devcost_modules import budget, decision, projects, reporting

__all__ = ["budget", "decision", "projects", "reporting"]
