"""
devcost_engines.journal -- Build the complete journal artifact for an accounting decision.

Responsibility:
    Compose the main two-line entry, the monthly amortization example
    entry, the amortization schedule, the explanation and the financial
    impact into a single ``DetailedJournalEntry`` value object.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel and sibling engines.  The entry date is
    a parameter; this module never reads a clock.

Invariants enforced:
    - Every generated line set balances (``assert_balanced``).
    - Capitalize is only accepted for phases that permit it.
    - related_entries and depreciation_schedule are empty for expense.

Failure modes:
    - InvalidProjectError if the project has no name or a non-positive cost.
    - TreatmentNotPermittedError if capitalize is requested outside the
      development phase.
    - UnbalancedEntryError if a line set does not balance.

Usage:
    from devcost_engines.journal import generate_journal_entries

    detail = generate_journal_entries(project, treatment, decision, date(2025, 4, 1))
    detail.main_entry[0].account  # "システム開発費" or "ソフトウェア資産"
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from devcost_engines.depreciation import (
    AMORTIZATION_YEARS,
    DepreciationEntry,
    generate_depreciation_schedule,
)
from devcost_engines.explanation import generate_explanation
from devcost_engines.impact import FinancialImpact, calculate_financial_impact
from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.amounts import ZERO, round_amount
from devcost_kernel.domain.journal import (
    ACCOUNT_CASH,
    ACCOUNT_SOFTWARE_ASSET,
    ACCOUNT_SOFTWARE_DEPRECIATION,
    ACCOUNT_SYSTEM_DEVELOPMENT_EXPENSE,
    AccountCategory,
    JournalEntryLine,
    assert_balanced,
)
from devcost_kernel.domain.project import (
    AccountingDecision,
    AccountingTreatment,
    Project,
    ensure_treatment_permitted,
)
from devcost_kernel.exceptions import InvalidProjectError
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.journal")

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class DetailedJournalEntry:
    """Everything shown for one booked decision."""

    main_entry: tuple[JournalEntryLine, ...]
    explanation: str
    impact: FinancialImpact
    related_entries: tuple[JournalEntryLine, ...] = ()
    depreciation_schedule: tuple[DepreciationEntry, ...] = ()

    @property
    def all_lines(self) -> tuple[JournalEntryLine, ...]:
        return self.main_entry + self.related_entries


def monthly_depreciation(cost: Decimal) -> Decimal:
    return round_amount(cost / (AMORTIZATION_YEARS * MONTHS_PER_YEAR))


def _line(
    line_id: str,
    entry_date: date,
    account: str,
    category: AccountCategory,
    description: str,
    *,
    debit: Decimal = ZERO,
    credit: Decimal = ZERO,
) -> JournalEntryLine:
    return JournalEntryLine(
        id=line_id,
        entry_date=entry_date,
        account=account,
        debit=debit,
        credit=credit,
        description=description,
        category=category,
    )


def _expense_lines(project: Project, entry_date: date) -> tuple[JournalEntryLine, ...]:
    return (
        _line(
            f"{project.id}-expense-debit", entry_date,
            ACCOUNT_SYSTEM_DEVELOPMENT_EXPENSE, AccountCategory.EXPENSE,
            f"{project.name}の開発費用", debit=project.cost,
        ),
        _line(
            f"{project.id}-expense-credit", entry_date,
            ACCOUNT_CASH, AccountCategory.ASSET,
            f"{project.name}の開発費用支払い", credit=project.cost,
        ),
    )


def _capitalize_lines(project: Project, entry_date: date) -> tuple[JournalEntryLine, ...]:
    return (
        _line(
            f"{project.id}-asset-debit", entry_date,
            ACCOUNT_SOFTWARE_ASSET, AccountCategory.ASSET,
            f"{project.name}のソフトウェア資産計上", debit=project.cost,
        ),
        _line(
            f"{project.id}-asset-credit", entry_date,
            ACCOUNT_CASH, AccountCategory.ASSET,
            f"{project.name}の開発費用支払い", credit=project.cost,
        ),
    )


def _depreciation_lines(project: Project, entry_date: date) -> tuple[JournalEntryLine, ...]:
    amount = monthly_depreciation(project.cost)
    if amount == ZERO:
        # Costs under 30 yen round to no monthly charge.
        return ()
    return (
        _line(
            f"{project.id}-depreciation-debit", entry_date,
            ACCOUNT_SOFTWARE_DEPRECIATION, AccountCategory.EXPENSE,
            f"{project.name}の月次減価償却", debit=amount,
        ),
        _line(
            f"{project.id}-depreciation-credit", entry_date,
            ACCOUNT_SOFTWARE_ASSET, AccountCategory.ASSET,
            f"{project.name}の減価償却累計額", credit=amount,
        ),
    )


@traced_engine(
    "journal", "1.0", fingerprint_fields=("project", "treatment", "entry_date"),
)
def generate_journal_entries(
    project: Project,
    treatment: AccountingTreatment,
    decision: AccountingDecision,
    entry_date: date,
) -> DetailedJournalEntry:
    """
    Generate the journal artifact for booking ``project`` under ``treatment``.

    Preconditions:
        project.name is non-blank and project.cost > 0.
        treatment is permitted for project.phase.

    Raises:
        InvalidProjectError: Blank name or non-positive cost.
        TreatmentNotPermittedError: Treatment not allowed for the phase.
        UnbalancedEntryError: A generated line set does not balance.
    """
    t0 = time.monotonic()
    if not project.name.strip():
        raise InvalidProjectError(project.id, "project name is required")
    if project.cost <= ZERO:
        raise InvalidProjectError(project.id, f"cost must be positive, got {project.cost}")
    ensure_treatment_permitted(project.phase, treatment)

    logger.info("journal_generation_started", extra={
        "project_id": project.id,
        "treatment": treatment.value,
        "phase": project.phase.value,
        "cost": str(project.cost),
    })

    related: tuple[JournalEntryLine, ...] = ()
    schedule: tuple[DepreciationEntry, ...] = ()
    if treatment == AccountingTreatment.EXPENSE:
        main = _expense_lines(project, entry_date)
    else:
        main = _capitalize_lines(project, entry_date)
        related = _depreciation_lines(project, entry_date)
        schedule = generate_depreciation_schedule(project.cost, AMORTIZATION_YEARS)

    assert_balanced(main)
    assert_balanced(related)

    detail = DetailedJournalEntry(
        main_entry=main,
        related_entries=related,
        depreciation_schedule=schedule,
        explanation=generate_explanation(project, treatment, decision),
        impact=calculate_financial_impact(project, treatment),
    )

    duration_ms = round((time.monotonic() - t0) * 1000, 2)
    logger.info("journal_generation_completed", extra={
        "project_id": project.id,
        "treatment": treatment.value,
        "line_count": len(detail.all_lines),
        "schedule_years": len(schedule),
        "duration_ms": duration_ms,
    })
    return detail
