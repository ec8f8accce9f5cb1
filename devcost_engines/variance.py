"""
devcost_engines.variance -- Budget-vs-actual variance decomposition.

Responsibility:
    Split the deviation between a budgeted and an actual cost into a
    quantity component (more or fewer units, e.g. person-days) and a rate
    component (a higher or lower unit price), and compare planned and
    actual monthly spend.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel.

Invariants enforced:
    - total_variance == quantity_variance + rate_variance exactly.
    - quantity variance is priced at the budgeted rate; rate variance is
      applied to the actual quantity.
    - is_favorable is True when actual cost < budgeted cost (variance < 0).
    - Purity: no clock access, no I/O.

Failure modes:
    - None raised.  variance_percent is Decimal("0") when the budgeted
      amount is zero.

Usage:
    from devcost_engines.variance import BudgetVarianceCalculator

    result = BudgetVarianceCalculator().analyze(
        budgeted_quantity=Decimal("150"),
        budgeted_rate=Decimal("100000"),
        actual_quantity=Decimal("180"),
        actual_rate=Decimal("100000"),
    )
    result.quantity_variance  # Decimal("3000000"), unfavorable
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.amounts import ZERO, percent
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.variance")


class VarianceType(str, Enum):
    """Component of a budget variance."""

    QUANTITY = "quantity"  # usage: person-days, licences, instances
    RATE = "rate"  # unit price: daily rate, licence price


@dataclass(frozen=True)
class BudgetVarianceResult:
    """
    Result of a budget variance decomposition.

    All fields are immutable. Use properties for derived values.
    """

    budgeted_amount: Decimal
    actual_amount: Decimal
    quantity_variance: Decimal
    rate_variance: Decimal
    total_variance: Decimal

    @property
    def is_favorable(self) -> bool:
        return self.total_variance < ZERO

    @property
    def variance_percent(self) -> Decimal:
        """Total variance as a percentage of the budgeted amount."""
        return percent(self.total_variance, self.budgeted_amount)

    def component(self, variance_type: VarianceType) -> Decimal:
        if variance_type == VarianceType.QUANTITY:
            return self.quantity_variance
        return self.rate_variance


@dataclass(frozen=True)
class MonthlyVariance:
    month: int
    planned_amount: Decimal
    actual_amount: Decimal
    variance: Decimal
    variance_percentage: Decimal

    @property
    def is_favorable(self) -> bool:
        return self.variance < ZERO


class BudgetVarianceCalculator:
    """
    Pure function calculator for budget variances.

    Contract:
        No I/O, fully deterministic.
    Guarantees:
        - quantity variance formula: (Actual Qty - Budgeted Qty) x Budgeted Rate.
        - rate variance formula: (Actual Rate - Budgeted Rate) x Actual Qty.
        - The two components add up to Actual Cost - Budgeted Cost.
    """

    @traced_engine(
        "budget_variance",
        "1.0",
        fingerprint_fields=("budgeted_quantity", "budgeted_rate", "actual_quantity", "actual_rate"),
    )
    def analyze(
        self,
        budgeted_quantity: Decimal,
        budgeted_rate: Decimal,
        actual_quantity: Decimal,
        actual_rate: Decimal,
    ) -> BudgetVarianceResult:
        t0 = time.monotonic()
        logger.info("budget_variance_started", extra={
            "budgeted_quantity": str(budgeted_quantity),
            "budgeted_rate": str(budgeted_rate),
            "actual_quantity": str(actual_quantity),
            "actual_rate": str(actual_rate),
        })

        budgeted_amount = budgeted_quantity * budgeted_rate
        actual_amount = actual_quantity * actual_rate
        quantity_variance = (actual_quantity - budgeted_quantity) * budgeted_rate
        rate_variance = (actual_rate - budgeted_rate) * actual_quantity

        result = BudgetVarianceResult(
            budgeted_amount=budgeted_amount,
            actual_amount=actual_amount,
            quantity_variance=quantity_variance,
            rate_variance=rate_variance,
            total_variance=quantity_variance + rate_variance,
        )

        duration_ms = round((time.monotonic() - t0) * 1000, 2)
        logger.info("budget_variance_calculated", extra={
            "quantity_variance": str(quantity_variance),
            "rate_variance": str(rate_variance),
            "total_variance": str(result.total_variance),
            "is_favorable": result.is_favorable,
            "duration_ms": duration_ms,
        })
        return result

    def monthly_variances(
        self,
        planned: Sequence[Decimal],
        actual: Sequence[Decimal],
    ) -> tuple[MonthlyVariance, ...]:
        """
        Planned vs actual per month; month numbers start at 1.

        Months beyond the shorter sequence are compared against zero.
        """
        months = max(len(planned), len(actual))
        rows: list[MonthlyVariance] = []
        for index in range(months):
            plan = planned[index] if index < len(planned) else ZERO
            act = actual[index] if index < len(actual) else ZERO
            rows.append(MonthlyVariance(
                month=index + 1,
                planned_amount=plan,
                actual_amount=act,
                variance=act - plan,
                variance_percentage=percent(act - plan, plan),
            ))

        logger.debug("monthly_variances_calculated", extra={
            "months": months,
            "over_budget_months": sum(1 for r in rows if r.variance > ZERO),
        })
        return tuple(rows)
