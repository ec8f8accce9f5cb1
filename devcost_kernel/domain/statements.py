"""
Financial Statement Domain Models (``devcost_kernel.domain.statements``).

Responsibility
--------------
Frozen dataclass value objects for the three statements the simulator
renders: profit and loss, balance sheet and cash flow.  Each nested
group carries its named sub-components and a ``total``.

Architecture position
---------------------
**Kernel > Domain** -- pure data definitions with ZERO I/O.  Built from
reference data by the modules layer, transformed by the impact
projector, read by the ratio calculator.

Invariants enforced
-------------------
* All models are ``frozen=True``; edits go through ``dataclasses.replace``.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* ``recalculated()`` rebuilds every total bottom-up from its components,
  so a total is never trusted after a partial edit.
* ``BalanceSheet.is_balanced``: assets.total == total_liabilities_and_equity.

Failure modes
-------------
* ``from_dict`` raises ``decimal.InvalidOperation`` on non-numeric values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, replace
from decimal import Decimal
from typing import Any, get_type_hints

from devcost_kernel.domain.amounts import ZERO, sum_amounts, to_amount

# Fields that are always derived by ``recalculated()``.
_DERIVED_FIELDS = frozenset({
    "total",
    "gross_profit",
    "operating_profit",
    "ordinary_profit",
    "pretax_profit",
    "net_profit",
    "total_liabilities_and_equity",
    "net_cash_flow",
    "ending_cash",
})


def _from_mapping(cls: type, data: dict[str, Any]) -> Any:
    """Build a (nested) statement dataclass, skipping derived fields."""
    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name in _DERIVED_FIELDS or f.name not in data:
            continue
        hint = hints[f.name]
        value = data[f.name]
        if is_dataclass(hint):
            kwargs[f.name] = _from_mapping(hint, value)
        else:
            kwargs[f.name] = to_amount(value)
    return cls(**kwargs)


# =========================================================================
# Profit & Loss
# =========================================================================


@dataclass(frozen=True)
class OperatingExpenses:
    salaries: Decimal = ZERO
    depreciation: Decimal = ZERO
    system_development: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> OperatingExpenses:
        return replace(self, total=sum_amounts((
            self.salaries, self.depreciation, self.system_development, self.other,
        )))


@dataclass(frozen=True)
class ProfitLossStatement:
    """
    Japanese-GAAP style multi-step P&L.

    revenue - cost_of_sales = gross_profit
    gross_profit - operating_expenses = operating_profit
    + non-operating income - non-operating expenses = ordinary_profit
    + extraordinary income - extraordinary loss = pretax_profit
    pretax_profit - income_tax = net_profit
    """

    revenue: Decimal = ZERO
    cost_of_sales: Decimal = ZERO
    operating_expenses: OperatingExpenses = field(default_factory=OperatingExpenses)
    non_operating_income: Decimal = ZERO
    non_operating_expenses: Decimal = ZERO
    extraordinary_income: Decimal = ZERO
    extraordinary_loss: Decimal = ZERO
    income_tax: Decimal = ZERO
    gross_profit: Decimal = ZERO
    operating_profit: Decimal = ZERO
    ordinary_profit: Decimal = ZERO
    pretax_profit: Decimal = ZERO
    net_profit: Decimal = ZERO

    def recalculated(self) -> ProfitLossStatement:
        """Derive every profit line from revenue, costs and income tax."""
        opex = self.operating_expenses.recalculated()
        gross = self.revenue - self.cost_of_sales
        operating = gross - opex.total
        ordinary = operating + self.non_operating_income - self.non_operating_expenses
        pretax = ordinary + self.extraordinary_income - self.extraordinary_loss
        return replace(
            self,
            operating_expenses=opex,
            gross_profit=gross,
            operating_profit=operating,
            ordinary_profit=ordinary,
            pretax_profit=pretax,
            net_profit=pretax - self.income_tax,
        )


# =========================================================================
# Balance Sheet
# =========================================================================


@dataclass(frozen=True)
class CurrentAssets:
    cash: Decimal = ZERO
    accounts_receivable: Decimal = ZERO
    inventory: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> CurrentAssets:
        return replace(self, total=sum_amounts((
            self.cash, self.accounts_receivable, self.inventory, self.other,
        )))


@dataclass(frozen=True)
class IntangibleAssets:
    software: Decimal = ZERO
    goodwill: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> IntangibleAssets:
        return replace(self, total=self.software + self.goodwill + self.other)


@dataclass(frozen=True)
class FixedAssets:
    tangible_assets: Decimal = ZERO
    intangible_assets: IntangibleAssets = field(default_factory=IntangibleAssets)
    investments: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> FixedAssets:
        intangible = self.intangible_assets.recalculated()
        return replace(
            self,
            intangible_assets=intangible,
            total=self.tangible_assets + intangible.total + self.investments,
        )


@dataclass(frozen=True)
class Assets:
    current_assets: CurrentAssets = field(default_factory=CurrentAssets)
    fixed_assets: FixedAssets = field(default_factory=FixedAssets)
    total: Decimal = ZERO

    def recalculated(self) -> Assets:
        current = self.current_assets.recalculated()
        fixed = self.fixed_assets.recalculated()
        return replace(
            self,
            current_assets=current,
            fixed_assets=fixed,
            total=current.total + fixed.total,
        )


@dataclass(frozen=True)
class CurrentLiabilities:
    accounts_payable: Decimal = ZERO
    short_term_debt: Decimal = ZERO
    accrued: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> CurrentLiabilities:
        return replace(self, total=sum_amounts((
            self.accounts_payable, self.short_term_debt, self.accrued, self.other,
        )))


@dataclass(frozen=True)
class LongTermLiabilities:
    long_term_debt: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> LongTermLiabilities:
        return replace(self, total=self.long_term_debt + self.other)


@dataclass(frozen=True)
class Liabilities:
    current_liabilities: CurrentLiabilities = field(default_factory=CurrentLiabilities)
    long_term_liabilities: LongTermLiabilities = field(default_factory=LongTermLiabilities)
    total: Decimal = ZERO

    def recalculated(self) -> Liabilities:
        current = self.current_liabilities.recalculated()
        long_term = self.long_term_liabilities.recalculated()
        return replace(
            self,
            current_liabilities=current,
            long_term_liabilities=long_term,
            total=current.total + long_term.total,
        )


@dataclass(frozen=True)
class Equity:
    capital: Decimal = ZERO
    retained_earnings: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> Equity:
        return replace(
            self, total=self.capital + self.retained_earnings + self.other,
        )


@dataclass(frozen=True)
class BalanceSheet:
    """Assets = Liabilities + Equity once ``recalculated()``."""

    assets: Assets = field(default_factory=Assets)
    liabilities: Liabilities = field(default_factory=Liabilities)
    equity: Equity = field(default_factory=Equity)
    total_liabilities_and_equity: Decimal = ZERO

    def recalculated(self) -> BalanceSheet:
        liabilities = self.liabilities.recalculated()
        equity = self.equity.recalculated()
        return replace(
            self,
            assets=self.assets.recalculated(),
            liabilities=liabilities,
            equity=equity,
            total_liabilities_and_equity=liabilities.total + equity.total,
        )

    @property
    def is_balanced(self) -> bool:
        return self.assets.total == self.total_liabilities_and_equity


# =========================================================================
# Cash Flow
# =========================================================================


@dataclass(frozen=True)
class OperatingActivities:
    net_income: Decimal = ZERO
    depreciation: Decimal = ZERO
    accounts_receivable_change: Decimal = ZERO
    inventory_change: Decimal = ZERO
    accounts_payable_change: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> OperatingActivities:
        return replace(self, total=sum_amounts((
            self.net_income,
            self.depreciation,
            self.accounts_receivable_change,
            self.inventory_change,
            self.accounts_payable_change,
            self.other,
        )))


@dataclass(frozen=True)
class InvestingActivities:
    equipment_purchase: Decimal = ZERO
    software_development: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> InvestingActivities:
        return replace(self, total=sum_amounts((
            self.equipment_purchase, self.software_development, self.other,
        )))


@dataclass(frozen=True)
class FinancingActivities:
    debt_issuance: Decimal = ZERO
    debt_repayment: Decimal = ZERO
    dividends: Decimal = ZERO
    other: Decimal = ZERO
    total: Decimal = ZERO

    def recalculated(self) -> FinancingActivities:
        return replace(self, total=sum_amounts((
            self.debt_issuance, self.debt_repayment, self.dividends, self.other,
        )))


@dataclass(frozen=True)
class CashFlowStatement:
    operating_activities: OperatingActivities = field(default_factory=OperatingActivities)
    investing_activities: InvestingActivities = field(default_factory=InvestingActivities)
    financing_activities: FinancingActivities = field(default_factory=FinancingActivities)
    beginning_cash: Decimal = ZERO
    net_cash_flow: Decimal = ZERO
    ending_cash: Decimal = ZERO

    def recalculated(self) -> CashFlowStatement:
        operating = self.operating_activities.recalculated()
        investing = self.investing_activities.recalculated()
        financing = self.financing_activities.recalculated()
        net = operating.total + investing.total + financing.total
        return replace(
            self,
            operating_activities=operating,
            investing_activities=investing,
            financing_activities=financing,
            net_cash_flow=net,
            ending_cash=self.beginning_cash + net,
        )


# =========================================================================
# Statement bundle
# =========================================================================


@dataclass(frozen=True)
class FinancialStatement:
    """The three statements for one reporting period."""

    profit_loss: ProfitLossStatement
    balance_sheet: BalanceSheet
    cash_flow: CashFlowStatement
    period: str = ""

    def recalculated(self) -> FinancialStatement:
        return replace(
            self,
            profit_loss=self.profit_loss.recalculated(),
            balance_sheet=self.balance_sheet.recalculated(),
            cash_flow=self.cash_flow.recalculated(),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FinancialStatement:
        """
        Build a statement from nested snake_case mappings.

        Derived fields (totals, profit lines, ending cash) in ``data`` are
        ignored and re-derived.
        """
        return cls(
            profit_loss=_from_mapping(ProfitLossStatement, data.get("profit_loss", {})),
            balance_sheet=_from_mapping(BalanceSheet, data.get("balance_sheet", {})),
            cash_flow=_from_mapping(CashFlowStatement, data.get("cash_flow", {})),
            period=str(data.get("period", "")),
        ).recalculated()
