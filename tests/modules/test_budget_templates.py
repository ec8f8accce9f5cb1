"""Tests for budget template generation and budget configuration."""

from decimal import Decimal

import pytest

from devcost_engines.budget_analysis import BudgetCategory, BudgetRules
from devcost_kernel.exceptions import TemplateNotFoundError
from devcost_modules.budget.config import BudgetAnalysisConfig
from devcost_modules.budget.templates import (
    LUMP_SUM_UNIT,
    available_template_types,
    generate_budget_template,
)


class TestGenerateTemplate:

    def test_web_template(self):
        items = generate_budget_template("web", Decimal("10000000"))

        assert len(items) == 8
        assert [i.id for i in items] == [f"template-{n}" for n in range(8)]
        assert items[0].category == BudgetCategory.PERSONNEL
        assert items[0].total_amount == Decimal("5500000")
        assert items[0].is_fixed is True
        assert items[1].is_fixed is False
        assert sum(i.total_amount for i in items) == Decimal("10000000")

    def test_item_fields(self):
        personnel = generate_budget_template("mobile", Decimal("1000000"))[0]

        assert personnel.subcategory == "開発要員"
        assert personnel.description == "mobileプロジェクト開発チームの人件費"
        assert personnel.notes == "mobileプロジェクト用テンプレート項目"
        assert personnel.unit == LUMP_SUM_UNIT
        assert personnel.quantity == Decimal("1")
        assert personnel.unit_price == personnel.total_amount

    def test_zero_share_categories_skipped(self):
        items = generate_budget_template("infrastructure", Decimal("10000000"))
        assert BudgetCategory.OTHER not in {i.category for i in items}
        assert len(items) == 7

    def test_spread_over_first_six_months(self):
        item = generate_budget_template("web", Decimal("12000000"))[0]

        assert len(item.schedule) == 12
        assert item.planned_in_month(1) == Decimal("1100000")
        assert item.planned_in_month(6) == Decimal("1100000")
        assert item.planned_in_month(7) == Decimal("0")

    def test_spread_months_configurable(self):
        config = BudgetAnalysisConfig(template_spread_months=12)
        item = generate_budget_template("web", Decimal("12000000"), config)[0]
        assert item.planned_in_month(12) == Decimal("550000")

    def test_unknown_type(self, captured_logs):
        with pytest.raises(TemplateNotFoundError) as exc_info:
            generate_budget_template("blockchain", Decimal("1000000"))

        assert exc_info.value.template_type == "blockchain"
        assert set(exc_info.value.available) == {"web", "mobile", "infrastructure", "ai"}
        assert any(r["message"] == "budget_template_not_found" for r in captured_logs())

    def test_available_types(self):
        assert available_template_types() == ("web", "mobile", "infrastructure", "ai")


class TestBudgetAnalysisConfig:

    def test_defaults(self):
        config = BudgetAnalysisConfig.with_defaults()
        assert config.rules == BudgetRules()
        assert config.template_spread_months == 6

    def test_from_dict_converts_rules(self):
        config = BudgetAnalysisConfig.from_dict({
            "rules": {"personnel_ratio_limit": 0.75, "front_loaded_months": 2},
            "template_spread_months": 3,
        })
        assert config.rules.personnel_ratio_limit == Decimal("0.75")
        assert config.rules.front_loaded_months == 2
        assert config.template_spread_months == 3

    @pytest.mark.parametrize("months", [0, 13])
    def test_spread_months_bounded(self, months):
        with pytest.raises(ValueError):
            BudgetAnalysisConfig(template_spread_months=months)
