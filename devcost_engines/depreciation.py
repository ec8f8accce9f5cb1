"""
devcost_engines.depreciation -- Straight-line amortization schedule for software assets.

Responsibility:
    Build the year-by-year amortization table of a capitalized software
    asset: beginning book value, the year's depreciation, ending book
    value.  Straight-line, zero residual value.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel.
    Consumed by the impact projector and the journal entry generator.

Invariants enforced:
    - Conservation: sum(depreciation_amount) == asset_cost exactly; the
      final year absorbs any rounding remainder.
    - Chaining: beginning_value[k + 1] == ending_value[k].
    - ending_value of the final year is zero.
    - Purity: identical inputs produce identical schedules.

Failure modes:
    - InvalidInputError if asset_cost <= 0 or years <= 0.

Usage:
    from devcost_engines.depreciation import generate_depreciation_schedule

    schedule = generate_depreciation_schedule(Decimal("12000000"), 5)
    schedule[0].depreciation_amount  # Decimal("2400000")
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from decimal import Decimal

from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.amounts import ZERO, round_amount, sum_amounts
from devcost_kernel.exceptions import InvalidInputError
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.depreciation")

# Useful life of capitalized internal-use software, in years.
AMORTIZATION_YEARS = 5


@dataclass(frozen=True)
class DepreciationEntry:
    """One row of an amortization schedule."""

    year: int
    beginning_value: Decimal
    depreciation_amount: Decimal
    ending_value: Decimal


def annual_depreciation(asset_cost: Decimal, years: int = AMORTIZATION_YEARS) -> Decimal:
    """Rounded straight-line charge for one full year."""
    return round_amount(asset_cost / years)


@traced_engine("depreciation", "1.0", fingerprint_fields=("asset_cost", "years"))
def generate_depreciation_schedule(
    asset_cost: Decimal,
    years: int = AMORTIZATION_YEARS,
) -> tuple[DepreciationEntry, ...]:
    """
    Generate a straight-line schedule over ``years``.

    Preconditions:
        asset_cost > 0 and years > 0.

    Postconditions:
        Returns ``years`` entries.  Years 1..N-1 charge
        ``round_amount(asset_cost / years)`` (never more than the
        remaining book value); year N charges whatever book value is left.

    Raises:
        InvalidInputError: On non-positive cost or term.
    """
    t0 = time.monotonic()
    if asset_cost <= ZERO:
        raise InvalidInputError("asset_cost", asset_cost, "must be positive")
    if years <= 0:
        raise InvalidInputError("years", years, "must be positive")

    logger.info("depreciation_schedule_started", extra={
        "asset_cost": str(asset_cost),
        "years": years,
    })

    annual = annual_depreciation(asset_cost, years)
    schedule: list[DepreciationEntry] = []
    beginning = asset_cost

    for year in range(1, years + 1):
        if year == years:
            amount = beginning
        else:
            amount = min(annual, beginning)
        ending = beginning - amount
        schedule.append(DepreciationEntry(
            year=year,
            beginning_value=beginning,
            depreciation_amount=amount,
            ending_value=ending,
        ))
        beginning = ending

    duration_ms = round((time.monotonic() - t0) * 1000, 2)
    logger.info("depreciation_schedule_calculated", extra={
        "annual_depreciation": str(annual),
        "final_year_amount": str(schedule[-1].depreciation_amount),
        "total_depreciation": str(sum_amounts(e.depreciation_amount for e in schedule)),
        "duration_ms": duration_ms,
    })

    return tuple(schedule)
