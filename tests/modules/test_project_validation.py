"""
Tests for project form validation.

Covers:
- Required fields and positive numbers
- Advisory warnings on cost, duration and personnel share
- Cost breakdown consistency
- Configurable thresholds
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from devcost_kernel.domain.project import CostBreakdown
from devcost_modules.projects.config import ProjectValidationConfig
from devcost_modules.projects.validation import (
    ValidationCode,
    validate_cost_breakdown,
    validate_project,
)


def _form(**overrides):
    data = {
        "name": "経費精算システム",
        "description": "ワークフロー刷新",
        "cost": "10000000",
        "duration": "12",
        "teamSize": "5",
    }
    data.update(overrides)
    return data


class TestRequiredFields:

    def test_valid_form(self):
        result = validate_project(_form())
        assert result.is_valid
        assert result.warnings == ()

    def test_valid_project_object(self, sample_project):
        assert validate_project(sample_project).is_valid

    def test_project_without_breakdown_is_valid(self, sample_project):
        project = replace(sample_project, cost_breakdown=CostBreakdown())
        assert validate_project(project).is_valid

    def test_empty_form_reports_every_field(self):
        result = validate_project({})
        assert result.error_fields() == ("name", "description", "cost", "duration", "team_size")
        assert result.errors[0].code == ValidationCode.REQUIRED_FIELD
        assert result.errors[2].code == ValidationCode.INVALID_VALUE

    @pytest.mark.parametrize("cost", ["0", "-5", "abc", ""])
    def test_bad_cost(self, cost):
        result = validate_project(_form(cost=cost))
        assert result.error_fields() == ("cost",)

    def test_whitespace_name(self):
        assert validate_project(_form(name="  ")).error_fields() == ("name",)

    def test_snake_case_team_size(self):
        data = _form()
        del data["teamSize"]
        data["team_size"] = 0
        assert validate_project(data).error_fields() == ("team_size",)


class TestWarnings:

    def test_low_cost(self):
        result = validate_project(_form(cost="500000"))
        assert result.is_valid
        assert [w.field for w in result.warnings] == ["cost"]
        assert result.warnings[0].message == "プロジェクト費用が低額です"

    def test_high_cost(self):
        result = validate_project(_form(cost="150000000"))
        assert result.warnings[0].message == "プロジェクト費用が高額です"

    def test_long_duration(self):
        result = validate_project(_form(duration="30"))
        assert [w.field for w in result.warnings] == ["duration"]

    def test_personnel_share(self):
        result = validate_project(_form(costBreakdown={
            "personnel": "9000000", "external": "1000000",
        }))
        assert result.is_valid
        assert [w.field for w in result.warnings] == ["cost_breakdown.personnel"]

    def test_thresholds_configurable(self):
        config = ProjectValidationConfig(low_cost_warning=Decimal("20000000"))
        result = validate_project(_form(), config)
        assert [w.field for w in result.warnings] == ["cost"]


class TestBreakdownConsistency:

    def test_mismatch_is_error(self):
        result = validate_project(_form(costBreakdown={"personnel": "5000000"}))
        assert result.error_fields() == ("cost_breakdown",)
        assert result.errors[0].code == ValidationCode.INCONSISTENT_DATA

    def test_within_one_percent_tolerated(self):
        result = validate_project(_form(costBreakdown={"personnel": "7000000", "external": "2950000"}))
        assert result.is_valid

    def test_negative_component_is_error_even_when_sum_matches(self):
        result = validate_project(_form(costBreakdown={"personnel": "-5000000", "external": "15000000"}))
        assert not result.is_valid
        assert result.error_fields() == ("cost_breakdown.personnel",)
        assert result.errors[0].code == ValidationCode.INVALID_VALUE

    def test_negative_component_on_project_object(self, sample_project):
        project = replace(sample_project, cost_breakdown=CostBreakdown(
            personnel=Decimal("-5000000"), external=Decimal("15000000"),
        ))
        result = validate_project(project)
        assert result.error_fields() == ("cost_breakdown.personnel",)

    def test_negative_only_breakdown_is_not_treated_as_absent(self, sample_project):
        project = replace(sample_project, cost_breakdown=CostBreakdown(personnel=Decimal("-1")))
        result = validate_project(project)
        assert "cost_breakdown.personnel" in result.error_fields()


class TestValidateCostBreakdown:

    def test_consistent(self):
        breakdown = CostBreakdown(personnel=Decimal("6000000"), external=Decimal("4000000"))
        result = validate_cost_breakdown(breakdown, Decimal("10000000"))
        assert result.is_valid
        assert result.warnings == ()

    def test_negative_component(self):
        result = validate_cost_breakdown(
            {"personnel": "10000000", "other": "-100"}, Decimal("10000000"),
        )
        assert "other" in result.error_fields()

    def test_total_mismatch_message(self):
        result = validate_cost_breakdown({"personnel": "8000000"}, Decimal("10000000"))
        assert result.errors[0].code == ValidationCode.INCONSISTENT_TOTAL
        assert "8,000,000円" in result.errors[0].message
        assert "10,000,000円" in result.errors[0].message

    def test_share_warnings(self):
        personnel_heavy = validate_cost_breakdown(
            {"personnel": "7500000", "external": "2500000"}, Decimal("10000000"),
        )
        assert [w.field for w in personnel_heavy.warnings] == ["personnel"]

        external_heavy = validate_cost_breakdown(
            {"personnel": "3500000", "external": "6500000"}, Decimal("10000000"),
        )
        assert [w.field for w in external_heavy.warnings] == ["external"]
