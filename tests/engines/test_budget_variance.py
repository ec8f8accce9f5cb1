"""
Tests for the budget variance calculator.

Covers:
- Quantity (usage) variance
- Rate (unit price) variance
- Combined decomposition and favourability
- Monthly planned vs actual comparison
"""

from decimal import Decimal

from devcost_engines.variance import BudgetVarianceCalculator, VarianceType


class TestAnalyze:

    def setup_method(self):
        self.calculator = BudgetVarianceCalculator()

    def test_quantity_overrun(self):
        """150 planned person-days became 180 at the budgeted daily rate."""
        result = self.calculator.analyze(
            budgeted_quantity=Decimal("150"),
            budgeted_rate=Decimal("100000"),
            actual_quantity=Decimal("180"),
            actual_rate=Decimal("100000"),
        )

        assert result.quantity_variance == Decimal("3000000")
        assert result.rate_variance == Decimal("0")
        assert result.total_variance == Decimal("3000000")
        assert result.is_favorable is False
        assert result.variance_percent == Decimal("20")

    def test_rate_saving(self):
        result = self.calculator.analyze(
            budgeted_quantity=Decimal("100"),
            budgeted_rate=Decimal("80000"),
            actual_quantity=Decimal("100"),
            actual_rate=Decimal("75000"),
        )

        assert result.quantity_variance == Decimal("0")
        assert result.rate_variance == Decimal("-500000")
        assert result.is_favorable is True

    def test_components_sum_to_cost_difference(self):
        result = self.calculator.analyze(
            budgeted_quantity=Decimal("150"),
            budgeted_rate=Decimal("100000"),
            actual_quantity=Decimal("170"),
            actual_rate=Decimal("95000"),
        )

        assert result.budgeted_amount == Decimal("15000000")
        assert result.actual_amount == Decimal("16150000")
        assert result.quantity_variance == Decimal("2000000")
        assert result.rate_variance == Decimal("-850000")
        assert result.total_variance == result.actual_amount - result.budgeted_amount
        assert result.component(VarianceType.QUANTITY) == Decimal("2000000")
        assert result.component(VarianceType.RATE) == Decimal("-850000")

    def test_zero_budget_percent(self):
        result = self.calculator.analyze(
            budgeted_quantity=Decimal("0"),
            budgeted_rate=Decimal("100"),
            actual_quantity=Decimal("1"),
            actual_rate=Decimal("100"),
        )
        assert result.variance_percent == Decimal("0")


class TestMonthlyVariances:

    def setup_method(self):
        self.calculator = BudgetVarianceCalculator()

    def test_per_month_rows(self):
        rows = self.calculator.monthly_variances(
            planned=[Decimal("100"), Decimal("200")],
            actual=[Decimal("110"), Decimal("150")],
        )

        assert [r.month for r in rows] == [1, 2]
        assert rows[0].variance == Decimal("10")
        assert rows[0].variance_percentage == Decimal("10")
        assert rows[0].is_favorable is False
        assert rows[1].variance == Decimal("-50")
        assert rows[1].is_favorable is True

    def test_missing_months_compared_against_zero(self):
        rows = self.calculator.monthly_variances(
            planned=[Decimal("100"), Decimal("100"), Decimal("100")],
            actual=[Decimal("100")],
        )

        assert len(rows) == 3
        assert rows[2].actual_amount == Decimal("0")
        assert rows[2].variance == Decimal("-100")
