"""
Kernel Invariants Contract.

These invariants are structural law for every calculation in the
engines layer. No configuration object may override them.

This module exists solely to declare the invariants explicitly. The
enforcement is distributed across the journal generator, the impact
projector, the depreciation scheduler and the confidence scorer.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the calculation core."""

    DOUBLE_ENTRY_BALANCE = "double_entry_balance"
    """Debits equal credits in every generated entry set. Enforced by
    ``assert_balanced`` inside the journal generator."""

    ACCOUNTING_IDENTITY = "accounting_identity"
    """Assets equal liabilities plus equity after every projection.
    Enforced by the impact projector, which re-derives all totals."""

    DEPRECIATION_CONSERVATION = "depreciation_conservation"
    """A schedule depreciates exactly the asset cost; the final year
    absorbs rounding."""

    SCORE_BOUNDS = "score_bounds"
    """Confidence scores are clamped to [0, 100]."""

    ENGINE_PURITY = "engine_purity"
    """Engines never read the clock or perform I/O; identical inputs give
    identical outputs."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "devcost_engines",
    "devcost_modules",
)

# Engines may only depend on the kernel.
FORBIDDEN_ENGINE_IMPORTS: tuple[str, ...] = (
    "devcost_modules",
)
