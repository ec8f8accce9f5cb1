"""Tests for the financial ratio engine."""

from decimal import Decimal

from devcost_engines.ratios import calculate_financial_ratios
from devcost_kernel.domain.statements import (
    BalanceSheet,
    CashFlowStatement,
    FinancialStatement,
    ProfitLossStatement,
)


class TestSampleRatios:

    def test_profitability(self, baseline_statement):
        ratios = calculate_financial_ratios(baseline_statement)
        assert ratios.gross_profit_margin == Decimal("40")
        assert ratios.operating_profit_margin == Decimal("16")
        assert ratios.net_profit_margin == Decimal("11.06")

    def test_safety(self, baseline_statement):
        ratios = calculate_financial_ratios(baseline_statement)
        assert ratios.current_ratio == Decimal("193.75")
        assert abs(ratios.debt_ratio + ratios.equity_ratio - Decimal("100")) < Decimal("0.0001")

    def test_turnover_is_not_a_percentage(self, baseline_statement):
        ratios = calculate_financial_ratios(baseline_statement)
        assert Decimal("0.75") < ratios.total_asset_turnover < Decimal("0.76")

    def test_returns(self, baseline_statement):
        ratios = calculate_financial_ratios(baseline_statement)
        assert Decimal("8.37") < ratios.roa < Decimal("8.38")
        assert Decimal("16.26") < ratios.roe < Decimal("16.27")
        assert Decimal("7.57") < ratios.software_asset_ratio < Decimal("7.58")

    def test_display_keys(self, baseline_statement):
        data = calculate_financial_ratios(baseline_statement).to_dict()
        assert set(data) == {
            "grossProfitMargin", "operatingProfitMargin", "netProfitMargin",
            "totalAssetTurnover", "roa", "roe", "currentRatio", "debtRatio",
            "equityRatio", "softwareAssetRatio",
        }


class TestZeroDenominators:

    def test_empty_statement_gives_zero_ratios(self, captured_logs):
        statement = FinancialStatement(
            profit_loss=ProfitLossStatement(),
            balance_sheet=BalanceSheet(),
            cash_flow=CashFlowStatement(),
        )
        ratios = calculate_financial_ratios(statement)

        assert all(value == Decimal("0") for value in ratios.to_dict().values())
        warnings = [r for r in captured_logs() if r["message"] == "ratio_denominator_zero"]
        assert len(warnings) == 10
        assert {r["level"] for r in warnings} == {"WARNING"}
