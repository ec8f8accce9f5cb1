"""
Scenario Comparison (``devcost_modules.reporting.comparison``).

Responsibility
--------------
Side-by-side view of a project's effect on the company: the baseline
statement, the statement with the project expensed, and the statement
with the project capitalized, each with its ratios, plus the deltas of
each treatment against the baseline.

Architecture position
---------------------
**Modules layer** -- orchestrates the impact projector and the ratio
calculator.  No arithmetic of its own beyond subtraction of results.

Invariants enforced
-------------------
* Scenarios are ordered baseline, expense, capitalize.
* Differences are reported for the two treatment scenarios only; each
  is measured against the same recalculated baseline.

Failure modes
-------------
* ``UnbalancedStatementError`` from the projector for an unbalanced
  baseline.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from devcost_engines.impact import project_impact
from devcost_engines.ratios import FinancialRatios, calculate_financial_ratios
from devcost_kernel.domain.project import AccountingTreatment, Project
from devcost_kernel.domain.statements import FinancialStatement
from devcost_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.comparison")

BASELINE_SCENARIO_ID = "baseline"

_SCENARIO_LABELS = {
    BASELINE_SCENARIO_ID: ("プロジェクト実施前", "プロジェクトを反映していない基準財務諸表"),
    AccountingTreatment.EXPENSE.value: ("費用化", "開発費用を当期の費用として計上"),
    AccountingTreatment.CAPITALIZE.value: ("資産化", "開発費用をソフトウェア資産として計上し5年で償却"),
}


@dataclass(frozen=True)
class FinancialScenario:
    id: str
    name: str
    description: str
    statement: FinancialStatement
    ratios: FinancialRatios
    treatment: AccountingTreatment | None = None


@dataclass(frozen=True)
class BalanceSheetImpact:
    assets: Decimal
    liabilities: Decimal
    equity: Decimal


@dataclass(frozen=True)
class FinancialDifference:
    scenario_id: str
    profit_loss_impact: Decimal  # change in net profit
    balance_sheet_impact: BalanceSheetImpact
    cash_flow_impact: Decimal  # change in ending cash
    description: str


@dataclass(frozen=True)
class FinancialComparison:
    baseline: FinancialStatement
    scenarios: tuple[FinancialScenario, ...]
    differences: tuple[FinancialDifference, ...]

    def scenario(self, scenario_id: str) -> FinancialScenario:
        for candidate in self.scenarios:
            if candidate.id == scenario_id:
                return candidate
        raise KeyError(scenario_id)


def _scenario(
    scenario_id: str,
    statement: FinancialStatement,
    treatment: AccountingTreatment | None,
) -> FinancialScenario:
    name, description = _SCENARIO_LABELS[scenario_id]
    return FinancialScenario(
        id=scenario_id,
        name=name,
        description=description,
        statement=statement,
        ratios=calculate_financial_ratios(statement),
        treatment=treatment,
    )


def _difference(
    baseline: FinancialStatement,
    scenario: FinancialScenario,
) -> FinancialDifference:
    base_bs = baseline.balance_sheet
    new_bs = scenario.statement.balance_sheet
    profit_change = scenario.statement.profit_loss.net_profit - baseline.profit_loss.net_profit
    return FinancialDifference(
        scenario_id=scenario.id,
        profit_loss_impact=profit_change,
        balance_sheet_impact=BalanceSheetImpact(
            assets=new_bs.assets.total - base_bs.assets.total,
            liabilities=new_bs.liabilities.total - base_bs.liabilities.total,
            equity=new_bs.equity.total - base_bs.equity.total,
        ),
        cash_flow_impact=scenario.statement.cash_flow.ending_cash - baseline.cash_flow.ending_cash,
        description=f"{scenario.name}: 当期純利益 {profit_change:+,f}円",
    )


def compare_scenarios(
    baseline: FinancialStatement,
    project: Project,
) -> FinancialComparison:
    """Project ``project`` under both treatments and compare with ``baseline``."""
    base = baseline.recalculated()
    scenarios = [_scenario(BASELINE_SCENARIO_ID, base, None)]
    for treatment in AccountingTreatment:
        projected = project_impact(base, project, treatment)
        scenarios.append(_scenario(treatment.value, projected, treatment))

    differences = tuple(_difference(base, s) for s in scenarios[1:])
    logger.info("scenarios_compared", extra={
        "project_id": project.id,
        "profit_loss_impacts": {d.scenario_id: str(d.profit_loss_impact) for d in differences},
    })
    return FinancialComparison(
        baseline=base,
        scenarios=tuple(scenarios),
        differences=differences,
    )
