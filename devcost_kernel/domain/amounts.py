"""
Amounts -- Decimal-only helpers for yen amounts, rates and percentages.

Responsibility:
    Single place where amounts are coerced to ``Decimal``, rounded to whole
    yen, and divided with a zero guard.  Every engine uses these helpers
    instead of ad-hoc ``round()`` or float arithmetic.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Decimal-only arithmetic: floats are converted through ``str`` so the
      printed value, not the binary approximation, is what gets stored.
    - Rounding to whole yen uses ``ROUND_HALF_UP``.

Failure modes:
    - ``TypeError`` from ``to_amount`` for values that are not numbers.
    - ``decimal.InvalidOperation`` for non-numeric strings.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Yen has no minor unit.
YEN_QUANTUM = Decimal("1")


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """
    Coerce a numeric value to ``Decimal``.

    Floats go through ``str`` so ``0.1`` becomes ``Decimal("0.1")``.
    ``bool`` is rejected even though it is an ``int`` subclass.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Cannot use bool as an amount: {value!r}")
    if isinstance(value, (int, str)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    raise TypeError(f"Cannot convert {type(value).__name__} to an amount")


def round_amount(value: Decimal) -> Decimal:
    """Round to whole yen, half away from zero."""
    return value.quantize(YEN_QUANTUM, rounding=ROUND_HALF_UP)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, returning ``Decimal("0")`` when the denominator is zero."""
    if denominator == ZERO:
        return ZERO
    return numerator / denominator


def percent(part: Decimal, whole: Decimal) -> Decimal:
    """``part / whole * 100`` with the zero guard of ``safe_divide``."""
    return safe_divide(part, whole) * HUNDRED


def sum_amounts(values) -> Decimal:
    """Sum an iterable of Decimals starting from ``Decimal("0")``."""
    return sum(values, ZERO)
