"""
Module: devcost_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for the
    modules layer (devcost_modules).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel (and sibling engine modules).
    MUST NOT import devcost_modules.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Entry dates are passed in as explicit parameters by the service.
    - Decimal-only arithmetic: all amounts use ``Decimal``.
    - Determinism: identical inputs always produce identical outputs.

Failure modes:
    - DevCostError subclasses propagated from individual engines on
      invalid input.

Audit relevance:
    Engine invocations are traced via ``@traced_engine`` (see
    ``devcost_engines.tracer``), emitting DEVCOST_ENGINE_TRACE log
    records with engine name, version, input fingerprint and duration.

Usage:
    from devcost_engines import generate_journal_entries, project_impact
    from devcost_engines import calculate_confidence_score, calculate_roi
"""

from devcost_kernel.logging_config import get_logger

logger = get_logger("engines")

from devcost_engines.budget_analysis import (
    BudgetAnalysis,
    BudgetCategory,
    BudgetItem,
    BudgetRecommendation,
    BudgetRisk,
    BudgetRules,
    CategoryBreakdown,
    MonthlyBudget,
    MonthlySchedule,
    analyze_budget,
    generate_budget_recommendations,
    generate_budget_risks,
)
from devcost_engines.confidence import (
    Recommendation,
    RecommendationDetail,
    build_recommendation,
    calculate_confidence_score,
    recommend,
)
from devcost_engines.depreciation import (
    AMORTIZATION_YEARS,
    DepreciationEntry,
    generate_depreciation_schedule,
)
from devcost_engines.explanation import generate_explanation
from devcost_engines.impact import (
    CORPORATE_TAX_RATE,
    FinancialImpact,
    calculate_financial_impact,
    project_impact,
)
from devcost_engines.journal import DetailedJournalEntry, generate_journal_entries
from devcost_engines.ratios import FinancialRatios, calculate_financial_ratios
from devcost_engines.roi import AnnualBenefit, ROICalculation, calculate_roi
from devcost_engines.tracer import traced_engine
from devcost_engines.variance import (
    BudgetVarianceCalculator,
    BudgetVarianceResult,
    MonthlyVariance,
)

__all__ = [
    # Budget analysis
    "BudgetAnalysis",
    "BudgetCategory",
    "BudgetItem",
    "BudgetRecommendation",
    "BudgetRisk",
    "BudgetRules",
    "CategoryBreakdown",
    "MonthlyBudget",
    "MonthlySchedule",
    "analyze_budget",
    "generate_budget_recommendations",
    "generate_budget_risks",
    # Confidence
    "Recommendation",
    "RecommendationDetail",
    "build_recommendation",
    "calculate_confidence_score",
    "recommend",
    # Depreciation
    "AMORTIZATION_YEARS",
    "DepreciationEntry",
    "generate_depreciation_schedule",
    # Explanation / journal
    "generate_explanation",
    "DetailedJournalEntry",
    "generate_journal_entries",
    # Impact
    "CORPORATE_TAX_RATE",
    "FinancialImpact",
    "calculate_financial_impact",
    "project_impact",
    # Ratios
    "FinancialRatios",
    "calculate_financial_ratios",
    # ROI
    "AnnualBenefit",
    "ROICalculation",
    "calculate_roi",
    # Variance
    "BudgetVarianceCalculator",
    "BudgetVarianceResult",
    "MonthlyVariance",
    # Tracing
    "traced_engine",
]
