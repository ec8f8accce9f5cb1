"""
devcost_engines.ratios -- Profitability, efficiency and safety ratios of a statement.

Responsibility:
    Derive the ratio set shown next to each scenario: margins, asset
    turnover, ROA/ROE, current/debt/equity ratios and the share of
    software among total assets.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel.

Invariants enforced:
    - Every ratio except total_asset_turnover is a percentage (x 100).
    - A zero denominator yields Decimal("0"), never an exception,
      NaN or infinity.  Each such case is logged as a warning.

Failure modes:
    - None raised.  Degenerate statements produce zero ratios.

Usage:
    from devcost_engines.ratios import calculate_financial_ratios

    ratios = calculate_financial_ratios(statement)
    ratios.equity_ratio          # Decimal, percent
    ratios.to_dict()["roe"]      # same values keyed by display name
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.amounts import HUNDRED, ZERO, safe_divide
from devcost_kernel.domain.statements import FinancialStatement
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.ratios")

# Display keys of the ratio table.
_DISPLAY_KEYS = {
    "gross_profit_margin": "grossProfitMargin",
    "operating_profit_margin": "operatingProfitMargin",
    "net_profit_margin": "netProfitMargin",
    "total_asset_turnover": "totalAssetTurnover",
    "roa": "roa",
    "roe": "roe",
    "current_ratio": "currentRatio",
    "debt_ratio": "debtRatio",
    "equity_ratio": "equityRatio",
    "software_asset_ratio": "softwareAssetRatio",
}


@dataclass(frozen=True)
class FinancialRatios:
    """Ratio snapshot of one statement."""

    # Profitability
    gross_profit_margin: Decimal
    operating_profit_margin: Decimal
    net_profit_margin: Decimal
    # Efficiency
    total_asset_turnover: Decimal
    roa: Decimal
    roe: Decimal
    # Safety
    current_ratio: Decimal
    debt_ratio: Decimal
    equity_ratio: Decimal
    # Growth (simplified)
    software_asset_ratio: Decimal

    def to_dict(self) -> dict[str, Decimal]:
        return {display: getattr(self, name) for name, display in _DISPLAY_KEYS.items()}


def _ratio(name: str, numerator: Decimal, denominator: Decimal, scale: Decimal = HUNDRED) -> Decimal:
    if denominator == ZERO:
        logger.warning("ratio_denominator_zero", extra={
            "ratio": name,
            "numerator": str(numerator),
        })
        return ZERO
    return safe_divide(numerator, denominator) * scale


@traced_engine("ratios", "1.0")
def calculate_financial_ratios(statement: FinancialStatement) -> FinancialRatios:
    """
    Compute the ratio set for ``statement``.

    The statement is read as-is; callers pass a recalculated statement
    so that totals match their components.
    """
    pl = statement.profit_loss
    bs = statement.balance_sheet
    total_assets = bs.assets.total

    ratios = FinancialRatios(
        gross_profit_margin=_ratio("gross_profit_margin", pl.gross_profit, pl.revenue),
        operating_profit_margin=_ratio("operating_profit_margin", pl.operating_profit, pl.revenue),
        net_profit_margin=_ratio("net_profit_margin", pl.net_profit, pl.revenue),
        total_asset_turnover=_ratio(
            "total_asset_turnover", pl.revenue, total_assets, scale=Decimal("1"),
        ),
        roa=_ratio("roa", pl.net_profit, total_assets),
        roe=_ratio("roe", pl.net_profit, bs.equity.total),
        current_ratio=_ratio(
            "current_ratio",
            bs.assets.current_assets.total,
            bs.liabilities.current_liabilities.total,
        ),
        debt_ratio=_ratio("debt_ratio", bs.liabilities.total, total_assets),
        equity_ratio=_ratio("equity_ratio", bs.equity.total, total_assets),
        software_asset_ratio=_ratio(
            "software_asset_ratio",
            bs.assets.fixed_assets.intangible_assets.software,
            total_assets,
        ),
    )

    logger.debug("financial_ratios_calculated", extra={
        "period": statement.period,
        "equity_ratio": str(ratios.equity_ratio),
        "roe": str(ratios.roe),
    })
    return ratios
