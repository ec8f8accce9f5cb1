"""
Decision Module (``devcost_modules.decision``).

Responsibility
--------------
The ``AccountingDecisionService`` facade: the single entry point through
which HTTP handlers, scripts and UI adapters reach the calculation core.
"""

from devcost_modules.decision.service import (
    AccountingDecisionService,
    DecisionOutcome,
    ProjectedStatements,
)

__all__ = [
    "AccountingDecisionService",
    "DecisionOutcome",
    "ProjectedStatements",
]
