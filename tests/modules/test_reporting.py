"""
Tests for the reporting module.

Covers:
- Baseline statement loading and configuration
- Expense vs capitalize scenario comparison
- JSON-ready rendering
"""

import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from devcost_engines.budget_analysis import BudgetCategory, analyze_budget
from devcost_kernel.domain.project import AccountingTreatment
from devcost_kernel.exceptions import UnbalancedStatementError
from devcost_modules.budget.templates import generate_budget_template
from devcost_modules.reporting.comparison import compare_scenarios
from devcost_modules.reporting.config import ReportingConfig
from devcost_modules.reporting.render import render_to_dict
from devcost_modules.reporting.sample import load_sample_statement


class TestSampleStatement:

    def test_default_period(self, baseline_statement):
        assert baseline_statement.period == "2025年度"
        assert baseline_statement.balance_sheet.is_balanced

    def test_period_override(self):
        statement = load_sample_statement(ReportingConfig(period_label="2026年度"))
        assert statement.period == "2026年度"

    def test_blank_period_label_rejected(self):
        with pytest.raises(ValueError):
            ReportingConfig(period_label="  ")

    def test_unbalanced_reference_data_rejected(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text(
            "balance_sheet:\n"
            "  assets:\n"
            "    current_assets:\n"
            "      cash: 100\n",
            encoding="utf-8",
        )
        with pytest.raises(UnbalancedStatementError):
            load_sample_statement(ReportingConfig(sample_statement_path=path))

    def test_config_from_dict(self, tmp_path: Path):
        config = ReportingConfig.from_dict({
            "sample_statement_path": str(tmp_path / "x.yaml"),
            "entity_name": "テスト株式会社",
        })
        assert config.sample_statement_path == tmp_path / "x.yaml"
        assert config.entity_name == "テスト株式会社"


class TestScenarioComparison:

    def test_three_scenarios(self, baseline_statement, sample_project):
        comparison = compare_scenarios(baseline_statement, sample_project)

        assert [s.id for s in comparison.scenarios] == ["baseline", "expense", "capitalize"]
        assert comparison.scenario("baseline").treatment is None
        assert comparison.scenario("capitalize").treatment == AccountingTreatment.CAPITALIZE
        with pytest.raises(KeyError):
            comparison.scenario("lease")

    def test_differences(self, baseline_statement, sample_project):
        comparison = compare_scenarios(baseline_statement, sample_project)
        by_id = {d.scenario_id: d for d in comparison.differences}

        expense = by_id["expense"]
        assert expense.profit_loss_impact == Decimal("-7000000")
        assert expense.balance_sheet_impact.assets == Decimal("-7000000")
        assert expense.balance_sheet_impact.liabilities == Decimal("0")
        assert expense.cash_flow_impact == Decimal("-7000000")

        capitalize = by_id["capitalize"]
        assert capitalize.profit_loss_impact == Decimal("-1400000")
        assert capitalize.balance_sheet_impact.equity == Decimal("-1400000")
        assert capitalize.cash_flow_impact == Decimal("-9400000")

    def test_description_shows_signed_amount(self, baseline_statement, sample_project):
        comparison = compare_scenarios(baseline_statement, sample_project)
        assert "-7,000,000円" in comparison.differences[0].description

    def test_capitalizing_keeps_higher_equity_ratio(self, baseline_statement, sample_project):
        comparison = compare_scenarios(baseline_statement, sample_project)
        assert (
            comparison.scenario("capitalize").ratios.equity_ratio
            > comparison.scenario("expense").ratios.equity_ratio
        )


class TestRender:

    def test_scalars(self):
        assert render_to_dict(Decimal("1.50")) == "1.50"
        assert render_to_dict(date(2025, 4, 1)) == "2025-04-01"
        assert render_to_dict(AccountingTreatment.EXPENSE) == "expense"
        assert render_to_dict(None) is None
        assert render_to_dict((1, 2)) == [1, 2]

    def test_enum_keys(self):
        analysis = analyze_budget(generate_budget_template("web", Decimal("1000000")))
        rendered = render_to_dict(analysis)

        assert rendered["category_breakdown"]["personnel"]["amount"] == "550000"
        assert set(rendered["category_breakdown"]) == {c.value for c in BudgetCategory}

    def test_comparison_is_json_serializable(self, baseline_statement, sample_project):
        rendered = render_to_dict(compare_scenarios(baseline_statement, sample_project))
        encoded = json.dumps(rendered, ensure_ascii=False)
        assert "capitalize" in encoded
        assert rendered["scenarios"][0]["statement"]["period"] == "2025年度"
