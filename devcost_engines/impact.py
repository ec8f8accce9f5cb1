"""
devcost_engines.impact -- Project an accounting treatment onto a baseline statement.

Responsibility:
    Two views of what a development project does to the books:

    * ``project_impact`` rebuilds a full FinancialStatement with the
      project's cost expensed or capitalized, taxes recomputed and every
      total re-derived.
    * ``calculate_financial_impact`` returns the compact current-year /
      future-years delta shown next to a generated journal entry.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel and sibling engines.

Invariants enforced:
    - Accounting identity: assets.total == total_liabilities_and_equity
      after projection.  Both sides are re-derived from components; the
      right-hand side is never copied from the left.
    - Cash reconciliation: cash_flow.ending_cash moves by the same amount
      as balance_sheet cash.
    - Tax rate and amortization term are fixed constants.
    - Five-year equivalence: the capitalize future-years P&L deltas sum to
      exactly -cost, the same as the one-time expense delta.

Failure modes:
    - UnbalancedStatementError if the baseline itself does not satisfy
      the accounting identity after recalculation.

Usage:
    from devcost_engines.impact import project_impact

    projected = project_impact(baseline, project, AccountingTreatment.CAPITALIZE)
    assert projected.balance_sheet.is_balanced
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from decimal import Decimal

from devcost_engines.depreciation import (
    AMORTIZATION_YEARS,
    annual_depreciation,
    generate_depreciation_schedule,
)
from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.amounts import ZERO, round_amount
from devcost_kernel.domain.project import AccountingTreatment, Project
from devcost_kernel.domain.statements import FinancialStatement
from devcost_kernel.exceptions import UnbalancedStatementError
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.impact")

CORPORATE_TAX_RATE = Decimal("0.30")

__all__ = [
    "AMORTIZATION_YEARS",
    "CORPORATE_TAX_RATE",
    "BalanceSheetDelta",
    "CurrentYearImpact",
    "FutureYearImpact",
    "FinancialImpact",
    "project_impact",
    "calculate_financial_impact",
]


@dataclass(frozen=True)
class BalanceSheetDelta:
    assets: Decimal = ZERO
    liabilities: Decimal = ZERO


@dataclass(frozen=True)
class CurrentYearImpact:
    profit_loss: Decimal
    balance_sheet: BalanceSheetDelta
    cash_flow: Decimal


@dataclass(frozen=True)
class FutureYearImpact:
    year: int
    profit_loss: Decimal
    balance_sheet: BalanceSheetDelta


@dataclass(frozen=True)
class FinancialImpact:
    """Pre-tax effect of a treatment, now and in later years."""

    current_year: CurrentYearImpact
    future_years: tuple[FutureYearImpact, ...] = ()

    @property
    def cumulative_profit_loss(self) -> Decimal:
        """Total P&L effect over the whole amortization term."""
        if not self.future_years:
            return self.current_year.profit_loss
        return sum((y.profit_loss for y in self.future_years), ZERO)


@traced_engine(
    "impact", "1.0", fingerprint_fields=("project", "treatment"),
)
def project_impact(
    baseline: FinancialStatement,
    project: Project,
    treatment: AccountingTreatment,
) -> FinancialStatement:
    """
    Return ``baseline`` with ``project`` booked under ``treatment``.

    Expense:
        operating_expenses.system_development += cost.
    Capitalize:
        software asset += cost net of one year's amortization,
        operating_expenses.depreciation += annual amortization,
        operating-activities depreciation add-back += annual amortization,
        investing software_development -= cost.
    Both:
        income tax = 30% of the new pretax profit; retained earnings move
        by the change in net profit; cash moves by the payment less the
        tax saving; operating cash flow picks up the new net profit.

    Raises:
        UnbalancedStatementError: If the baseline is unbalanced.
    """
    t0 = time.monotonic()
    base = baseline.recalculated()
    bs = base.balance_sheet
    if not bs.is_balanced:
        logger.error("impact_baseline_unbalanced", extra={
            "total_assets": str(bs.assets.total),
            "total_liabilities_and_equity": str(bs.total_liabilities_and_equity),
        })
        raise UnbalancedStatementError(
            str(bs.assets.total), str(bs.total_liabilities_and_equity),
        )

    cost = project.cost
    logger.info("impact_projection_started", extra={
        "project_id": project.id,
        "treatment": treatment.value,
        "cost": str(cost),
    })

    pl = base.profit_loss
    cf = base.cash_flow
    opex = pl.operating_expenses
    intangible = bs.assets.fixed_assets.intangible_assets
    operating_cf = cf.operating_activities
    investing_cf = cf.investing_activities

    if treatment == AccountingTreatment.EXPENSE:
        opex = replace(opex, system_development=opex.system_development + cost)
    else:
        annual = annual_depreciation(cost)
        opex = replace(opex, depreciation=opex.depreciation + annual)
        intangible = replace(intangible, software=intangible.software + cost - annual)
        operating_cf = replace(operating_cf, depreciation=operating_cf.depreciation + annual)
        investing_cf = replace(
            investing_cf,
            software_development=investing_cf.software_development - cost,
        )

    projected_pl = replace(pl, operating_expenses=opex).recalculated()
    income_tax = round_amount(projected_pl.pretax_profit * CORPORATE_TAX_RATE)
    projected_pl = replace(projected_pl, income_tax=income_tax).recalculated()

    net_change = projected_pl.net_profit - pl.net_profit
    tax_change = income_tax - pl.income_tax

    current_assets = bs.assets.current_assets
    projected_bs = replace(
        bs,
        assets=replace(
            bs.assets,
            current_assets=replace(current_assets, cash=current_assets.cash - cost - tax_change),
            fixed_assets=replace(bs.assets.fixed_assets, intangible_assets=intangible),
        ),
        equity=replace(bs.equity, retained_earnings=bs.equity.retained_earnings + net_change),
    ).recalculated()

    projected_cf = replace(
        cf,
        operating_activities=replace(operating_cf, net_income=projected_pl.net_profit),
        investing_activities=investing_cf,
    ).recalculated()

    projected = replace(
        base,
        profit_loss=projected_pl,
        balance_sheet=projected_bs,
        cash_flow=projected_cf,
    )

    duration_ms = round((time.monotonic() - t0) * 1000, 2)
    logger.info("impact_projection_calculated", extra={
        "project_id": project.id,
        "treatment": treatment.value,
        "net_profit_change": str(net_change),
        "income_tax_change": str(tax_change),
        "total_assets": str(projected_bs.assets.total),
        "is_balanced": projected_bs.is_balanced,
        "duration_ms": duration_ms,
    })
    return projected


@traced_engine(
    "financial_impact", "1.0", fingerprint_fields=("project", "treatment"),
)
def calculate_financial_impact(
    project: Project,
    treatment: AccountingTreatment,
) -> FinancialImpact:
    """
    Pre-tax current/future-year deltas of booking ``project``.

    Expense hits P&L, assets and cash with the full cost in the current
    year and has no future effect.  Capitalize swaps cash for the asset
    (no net balance-sheet change), charges year-1 amortization to P&L,
    and lists every amortization year from the schedule.
    """
    cost = project.cost

    if treatment == AccountingTreatment.EXPENSE:
        return FinancialImpact(
            current_year=CurrentYearImpact(
                profit_loss=-cost,
                balance_sheet=BalanceSheetDelta(assets=-cost, liabilities=ZERO),
                cash_flow=-cost,
            ),
            future_years=(),
        )

    schedule = generate_depreciation_schedule(cost, AMORTIZATION_YEARS)
    future_years = tuple(
        FutureYearImpact(
            year=entry.year,
            profit_loss=-entry.depreciation_amount,
            balance_sheet=BalanceSheetDelta(assets=-entry.depreciation_amount),
        )
        for entry in schedule
    )
    return FinancialImpact(
        current_year=CurrentYearImpact(
            profit_loss=-schedule[0].depreciation_amount,
            balance_sheet=BalanceSheetDelta(assets=ZERO, liabilities=ZERO),
            cash_flow=-cost,
        ),
        future_years=future_years,
    )
