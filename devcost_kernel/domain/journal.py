"""
Journal lines and the double-entry balance check.

Responsibility:
    Value objects for generated journal lines, the account names used by
    the generator, and ``assert_balanced`` which enforces the
    DOUBLE_ENTRY_BALANCE invariant on any line set.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Each line carries exactly one non-zero side (checked on construction).
    - ``assert_balanced`` raises when total debits != total credits.

Failure modes:
    - ValueError on a line with both sides zero, both sides set, or a
      negative amount.
    - UnbalancedEntryError from ``assert_balanced``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from devcost_kernel.domain.amounts import ZERO, sum_amounts
from devcost_kernel.exceptions import UnbalancedEntryError

# Chart of accounts used by generated entries.
ACCOUNT_SYSTEM_DEVELOPMENT_EXPENSE = "システム開発費"
ACCOUNT_SOFTWARE_ASSET = "ソフトウェア資産"
ACCOUNT_SOFTWARE_DEPRECIATION = "ソフトウェア減価償却費"
ACCOUNT_CASH = "現金・預金"


class AccountCategory(str, Enum):
    """Financial statement element an account belongs to."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


@dataclass(frozen=True)
class JournalEntryLine:
    """One side of a double-entry journal entry."""

    id: str
    entry_date: date
    account: str
    debit: Decimal
    credit: Decimal
    description: str
    category: AccountCategory

    def __post_init__(self) -> None:
        if self.debit < ZERO or self.credit < ZERO:
            raise ValueError(f"Journal line {self.id} has a negative amount")
        if (self.debit == ZERO) == (self.credit == ZERO):
            raise ValueError(
                f"Journal line {self.id} must have exactly one non-zero side"
            )

    @property
    def is_debit(self) -> bool:
        return self.debit > ZERO

    @property
    def amount(self) -> Decimal:
        return self.debit if self.is_debit else self.credit


def total_debits(lines: Sequence[JournalEntryLine]) -> Decimal:
    return sum_amounts(line.debit for line in lines)


def total_credits(lines: Sequence[JournalEntryLine]) -> Decimal:
    return sum_amounts(line.credit for line in lines)


def is_balanced(lines: Sequence[JournalEntryLine]) -> bool:
    return total_debits(lines) == total_credits(lines)


def assert_balanced(lines: Sequence[JournalEntryLine]) -> None:
    """Raise ``UnbalancedEntryError`` unless debits equal credits."""
    debits = total_debits(lines)
    credits = total_credits(lines)
    if debits != credits:
        raise UnbalancedEntryError(str(debits), str(credits))
