"""
devcost_engines.roi -- ROI, NPV, approximate IRR and payback period of an investment.

Responsibility:
    Evaluate a system investment against a flat annual benefit stream
    (revenue + cost savings - operating cost) over a fixed horizon.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel.

Invariants enforced:
    - ROI is on the total-benefit basis:
      (sum of nominal benefits - investment) / investment * 100.
    - IRR is a linear search: start at 10%, step 1 point toward NPV = 0,
      at most 100 steps, stop when |NPV| < 1000 yen, rate clamped to
      [0%, 100%].  Callers must tolerate a 1-point error.
    - Payback period never exceeds the horizon.

Failure modes:
    - InvalidInputError if investment <= 0 or years <= 0.
    - IRR non-convergence is not an error: the last trial rate is
      returned with ``irr_converged=False`` and a warning is logged.

Usage:
    from devcost_engines.roi import calculate_roi

    result = calculate_roi(Decimal("5000000"), Decimal("2000000"), Decimal("0"),
                           years=3, annual_operating_cost=Decimal("500000"))
    result.roi  # Decimal("-10")
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from decimal import Decimal

from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.amounts import HUNDRED, ZERO, sum_amounts
from devcost_kernel.exceptions import InvalidInputError
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.roi")

DEFAULT_HORIZON_YEARS = 5
DEFAULT_DISCOUNT_RATE = Decimal("0.1")

IRR_INITIAL_RATE = Decimal("0.1")
IRR_STEP = Decimal("0.01")
IRR_MAX_ITERATIONS = 100
IRR_NPV_TOLERANCE = Decimal("1000")
IRR_MIN_RATE = Decimal("0")
IRR_MAX_RATE = Decimal("1")


@dataclass(frozen=True)
class AnnualBenefit:
    year: int
    revenue: Decimal
    cost_savings: Decimal
    operating_cost: Decimal
    total_benefit: Decimal
    discounted_benefit: Decimal


@dataclass(frozen=True)
class ROICalculation:
    """Investment appraisal result.  ``irr`` and ``roi`` are percentages."""

    investment: Decimal
    benefits: tuple[AnnualBenefit, ...]
    npv: Decimal
    irr: Decimal
    irr_converged: bool
    payback_period: Decimal
    roi: Decimal


def net_present_value(
    investment: Decimal,
    benefits: tuple[AnnualBenefit, ...],
    rate: Decimal,
) -> Decimal:
    """NPV of the nominal benefit stream at ``rate``."""
    return sum_amounts(
        b.total_benefit / (1 + rate) ** b.year for b in benefits
    ) - investment


def approximate_irr(
    investment: Decimal,
    benefits: tuple[AnnualBenefit, ...],
) -> tuple[Decimal, bool]:
    """
    Linear-step search for the rate where NPV is within tolerance of zero.

    Returns (rate, converged).  The rate is a fraction, not a percentage.
    """
    rate = IRR_INITIAL_RATE
    for _ in range(IRR_MAX_ITERATIONS):
        npv = net_present_value(investment, benefits, rate)
        if abs(npv) < IRR_NPV_TOLERANCE:
            return rate, True
        rate += IRR_STEP if npv > ZERO else -IRR_STEP
        rate = max(IRR_MIN_RATE, min(IRR_MAX_RATE, rate))
    return rate, False


def payback_period(
    investment: Decimal,
    benefits: tuple[AnnualBenefit, ...],
    horizon: int,
) -> Decimal:
    """
    First year the cumulative nominal cash flow is non-negative,
    interpolated within that year.  The horizon if never recovered.
    """
    cumulative = -investment
    for benefit in benefits:
        prior = cumulative
        cumulative += benefit.total_benefit
        if cumulative >= ZERO:
            return Decimal(benefit.year - 1) + (-prior) / benefit.total_benefit
    return Decimal(horizon)


@traced_engine(
    "roi",
    "1.0",
    fingerprint_fields=(
        "investment",
        "annual_revenue",
        "annual_cost_savings",
        "years",
        "discount_rate",
        "annual_operating_cost",
    ),
)
def calculate_roi(
    investment: Decimal,
    annual_revenue: Decimal,
    annual_cost_savings: Decimal,
    years: int = DEFAULT_HORIZON_YEARS,
    discount_rate: Decimal = DEFAULT_DISCOUNT_RATE,
    annual_operating_cost: Decimal = ZERO,
) -> ROICalculation:
    """
    Appraise ``investment`` against a flat annual benefit.

    Raises:
        InvalidInputError: Non-positive investment or horizon.
    """
    t0 = time.monotonic()
    if investment <= ZERO:
        raise InvalidInputError("investment", investment, "must be positive")
    if years <= 0:
        raise InvalidInputError("years", years, "must be positive")

    logger.info("roi_calculation_started", extra={
        "investment": str(investment),
        "annual_revenue": str(annual_revenue),
        "annual_cost_savings": str(annual_cost_savings),
        "annual_operating_cost": str(annual_operating_cost),
        "years": years,
        "discount_rate": str(discount_rate),
    })

    total_benefit = annual_revenue + annual_cost_savings - annual_operating_cost
    benefits = tuple(
        AnnualBenefit(
            year=year,
            revenue=annual_revenue,
            cost_savings=annual_cost_savings,
            operating_cost=annual_operating_cost,
            total_benefit=total_benefit,
            discounted_benefit=total_benefit / (1 + discount_rate) ** year,
        )
        for year in range(1, years + 1)
    )

    npv = sum_amounts(b.discounted_benefit for b in benefits) - investment
    irr, converged = approximate_irr(investment, benefits)
    if not converged:
        logger.warning("irr_not_converged", extra={
            "investment": str(investment),
            "last_trial_rate": str(irr),
            "iterations": IRR_MAX_ITERATIONS,
        })

    total_benefits = sum_amounts(b.total_benefit for b in benefits)
    roi = (total_benefits - investment) / investment * HUNDRED

    result = ROICalculation(
        investment=investment,
        benefits=benefits,
        npv=npv,
        irr=irr * HUNDRED,
        irr_converged=converged,
        payback_period=payback_period(investment, benefits, years),
        roi=roi,
    )

    duration_ms = round((time.monotonic() - t0) * 1000, 2)
    logger.info("roi_calculated", extra={
        "roi": str(result.roi),
        "npv": str(result.npv),
        "irr": str(result.irr),
        "irr_converged": converged,
        "payback_period": str(result.payback_period),
        "duration_ms": duration_ms,
    })
    return result
