"""
Accounting Decision Service (``devcost_modules.decision.service``).

Responsibility
--------------
Single entry point for callers (HTTP handlers, scripts, UI adapters):
validates input, runs the pure engines, and stamps results with the
caller's identity in the log context.  Holds no state between calls.

Architecture position
---------------------
**Modules layer** -- thin facade.  ``AccountingDecisionService`` composes
the stateless engines (confidence, journal, impact, ratios, ROI, budget
analysis, variance) with project validation and reference data.

Invariants enforced
-------------------
* The entry date of generated journal lines comes from the injected
  ``Clock``; engines never read the clock.
* Every public method binds ``actor_id``/``tenant_id`` of the
  ``UserContext`` (single-user default) into ``LogContext``; calculations
  never read it.
* A project that fails validation never reaches the journal generator.

Failure modes
-------------
* ``InvalidProjectError`` (with the validation errors attached) for a
  project that fails form validation.
* ``TreatmentNotPermittedError`` for capitalize outside development.
* ``InvalidInputError`` from the ROI engine.
* ``TemplateNotFoundError`` for an unknown budget template.

Usage::

    service = AccountingDecisionService()
    outcome = service.evaluate(project, criteria, AccountingTreatment.CAPITALIZE)
    outcome.recommendation.title   # "資産計上を推奨"
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from uuid import uuid4

from devcost_engines.budget_analysis import BudgetAnalysis, BudgetItem, analyze_budget
from devcost_engines.confidence import (
    RecommendationDetail,
    build_recommendation,
    calculate_confidence_score,
)
from devcost_engines.impact import project_impact
from devcost_engines.journal import DetailedJournalEntry, generate_journal_entries
from devcost_engines.ratios import FinancialRatios, calculate_financial_ratios
from devcost_engines.roi import (
    DEFAULT_DISCOUNT_RATE,
    DEFAULT_HORIZON_YEARS,
    ROICalculation,
    calculate_roi,
)
from devcost_engines.variance import BudgetVarianceCalculator, BudgetVarianceResult
from devcost_kernel.domain.amounts import ZERO
from devcost_kernel.domain.clock import Clock, SystemClock
from devcost_kernel.domain.project import (
    AccountingDecision,
    AccountingTreatment,
    DecisionCriteria,
    Project,
)
from devcost_kernel.domain.statements import FinancialStatement
from devcost_kernel.domain.user_context import UserContext
from devcost_kernel.exceptions import InvalidProjectError
from devcost_kernel.logging_config import LogContext, get_logger
from devcost_modules.budget.config import BudgetAnalysisConfig
from devcost_modules.budget.templates import generate_budget_template
from devcost_modules.projects.config import ProjectValidationConfig
from devcost_modules.projects.validation import ValidationResult, validate_project
from devcost_modules.reporting.comparison import FinancialComparison, compare_scenarios

logger = get_logger("modules.decision.service")


@dataclass(frozen=True)
class DecisionOutcome:
    """Everything produced for one evaluated decision."""

    decision: AccountingDecision
    recommendation: RecommendationDetail
    journal: DetailedJournalEntry
    validation: ValidationResult


@dataclass(frozen=True)
class ProjectedStatements:
    statement: FinancialStatement
    ratios: FinancialRatios


class AccountingDecisionService:
    """
    Facade over the calculation engines.

    Contract
    --------
    * Methods are pure apart from logging; the same inputs and clock
      give the same results.
    * ``user`` defaults to ``UserContext.single_user()`` everywhere.

    Non-goals
    ---------
    * Does NOT persist projects, decisions or budgets.
    * Does NOT authenticate callers; ``UserContext`` is trusted as given.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        validation_config: ProjectValidationConfig | None = None,
        budget_config: BudgetAnalysisConfig | None = None,
    ):
        self._clock = clock or SystemClock()
        self._validation_config = validation_config or ProjectValidationConfig()
        self._budget_config = budget_config or BudgetAnalysisConfig()
        self._variance = BudgetVarianceCalculator()

    def _context(self, user: UserContext | None, project_id: str | None = None):
        user = user or UserContext.single_user()
        return LogContext.bind(
            correlation_id=str(uuid4()),
            project_id=project_id,
            **user.log_fields(),
        )

    # =========================================================================
    # Accounting decision
    # =========================================================================

    def evaluate(
        self,
        project: Project,
        criteria: DecisionCriteria,
        treatment: AccountingTreatment,
        reasoning: str = "",
        user: UserContext | None = None,
    ) -> DecisionOutcome:
        """
        Validate, score and book an accounting decision for ``project``.

        Raises:
            InvalidProjectError: Project fails validation.
            TreatmentNotPermittedError: Treatment not allowed for the phase.
        """
        with self._context(user, project.id):
            logger.info("decision_evaluation_started", extra={
                "treatment": treatment.value,
                "phase": project.phase.value,
            })

            validation = validate_project(project, self._validation_config)
            if not validation.is_valid:
                logger.warning("decision_rejected_invalid_project", extra={
                    "error_fields": list(validation.error_fields()),
                })
                raise InvalidProjectError(
                    project.id, "project failed validation", errors=validation.errors,
                )

            score = calculate_confidence_score(project, criteria, treatment)
            decision = AccountingDecision(
                phase=project.phase,
                treatment=treatment,
                criteria=criteria,
                reasoning=reasoning,
                confidence=score,
            )
            journal = generate_journal_entries(
                project, treatment, decision, self._clock.today(),
            )
            recommendation = build_recommendation(score)

            logger.info("decision_evaluation_completed", extra={
                "treatment": treatment.value,
                "confidence": score,
                "recommendation": recommendation.recommendation.value,
                "warning_count": len(validation.warnings),
            })
            return DecisionOutcome(
                decision=decision,
                recommendation=recommendation,
                journal=journal,
                validation=validation,
            )

    # =========================================================================
    # Statement projection
    # =========================================================================

    def project_statements(
        self,
        baseline: FinancialStatement,
        project: Project,
        treatment: AccountingTreatment,
        user: UserContext | None = None,
    ) -> ProjectedStatements:
        with self._context(user, project.id):
            statement = project_impact(baseline, project, treatment)
            return ProjectedStatements(
                statement=statement,
                ratios=calculate_financial_ratios(statement),
            )

    def compare_scenarios(
        self,
        baseline: FinancialStatement,
        project: Project,
        user: UserContext | None = None,
    ) -> FinancialComparison:
        with self._context(user, project.id):
            return compare_scenarios(baseline, project)

    # =========================================================================
    # Budget planning
    # =========================================================================

    def budget_template(
        self,
        project_type: str,
        total_budget: Decimal,
        user: UserContext | None = None,
    ) -> tuple[BudgetItem, ...]:
        with self._context(user):
            return generate_budget_template(project_type, total_budget, self._budget_config)

    def analyze_budget(
        self,
        items: Sequence[BudgetItem],
        user: UserContext | None = None,
    ) -> BudgetAnalysis:
        with self._context(user):
            return analyze_budget(items, self._budget_config.rules)

    def analyze_variance(
        self,
        budgeted_quantity: Decimal,
        budgeted_rate: Decimal,
        actual_quantity: Decimal,
        actual_rate: Decimal,
        user: UserContext | None = None,
    ) -> BudgetVarianceResult:
        with self._context(user):
            return self._variance.analyze(
                budgeted_quantity=budgeted_quantity,
                budgeted_rate=budgeted_rate,
                actual_quantity=actual_quantity,
                actual_rate=actual_rate,
            )

    def calculate_roi(
        self,
        investment: Decimal,
        annual_revenue: Decimal,
        annual_cost_savings: Decimal,
        years: int = DEFAULT_HORIZON_YEARS,
        discount_rate: Decimal = DEFAULT_DISCOUNT_RATE,
        annual_operating_cost: Decimal = ZERO,
        user: UserContext | None = None,
    ) -> ROICalculation:
        with self._context(user):
            return calculate_roi(
                investment,
                annual_revenue,
                annual_cost_savings,
                years=years,
                discount_rate=discount_rate,
                annual_operating_cost=annual_operating_cost,
            )
