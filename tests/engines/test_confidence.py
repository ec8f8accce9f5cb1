"""Tests for the confidence score and recommendation bands."""

from dataclasses import replace
from decimal import Decimal

import pytest

from devcost_engines.confidence import (
    Recommendation,
    build_recommendation,
    calculate_confidence_score,
    recommend,
)
from devcost_kernel.domain.project import (
    AccountingTreatment,
    DecisionCriteria,
    ProjectComplexity,
    RiskLevel,
)

EXPENSE = AccountingTreatment.EXPENSE
CAPITALIZE = AccountingTreatment.CAPITALIZE


class TestScore:

    def test_neutral_project_without_criteria_scores_base(self, sample_project, no_criteria):
        assert calculate_confidence_score(sample_project, no_criteria, CAPITALIZE) == 50

    def test_each_criterion_adds_fifteen(self, sample_project):
        criteria = DecisionCriteria(future_economic_benefit=True, technical_feasibility=True)
        assert calculate_confidence_score(sample_project, criteria, CAPITALIZE) == 80

    def test_clamped_at_hundred(self, sample_project, all_criteria):
        assert calculate_confidence_score(sample_project, all_criteria, CAPITALIZE) == 100

    def test_treatment_does_not_change_points(self, sample_project, all_criteria):
        assert calculate_confidence_score(sample_project, all_criteria, EXPENSE) == (
            calculate_confidence_score(sample_project, all_criteria, CAPITALIZE)
        )

    def test_every_penalty(self, sample_project, no_criteria):
        project = replace(
            sample_project,
            complexity=ProjectComplexity.HIGH,
            risk_level=RiskLevel.HIGH,
            cost=Decimal("1000000"),
            duration=2,
        )
        # 50 - 10 - 15 - 5 - 10
        assert calculate_confidence_score(project, no_criteria, EXPENSE) == 10

    def test_every_bonus(self, sample_project, no_criteria):
        project = replace(
            sample_project,
            complexity=ProjectComplexity.LOW,
            risk_level=RiskLevel.LOW,
            cost=Decimal("60000000"),
            duration=18,
        )
        # 50 + 5 + 10 + 10 + 5
        assert calculate_confidence_score(project, no_criteria, CAPITALIZE) == 80

    @pytest.mark.parametrize("cost, expected", [
        (Decimal("50000000"), 50),  # threshold itself is not "large"
        (Decimal("50000001"), 60),
        (Decimal("5000000"), 50),  # threshold itself is not "small"
        (Decimal("4999999"), 45),
    ])
    def test_cost_thresholds_are_strict(self, sample_project, no_criteria, cost, expected):
        project = replace(sample_project, cost=cost)
        assert calculate_confidence_score(project, no_criteria, CAPITALIZE) == expected

    @pytest.mark.parametrize("duration, expected", [(12, 50), (13, 55), (3, 50), (2, 40)])
    def test_duration_thresholds_are_strict(self, sample_project, no_criteria, duration, expected):
        project = replace(sample_project, duration=duration)
        assert calculate_confidence_score(project, no_criteria, CAPITALIZE) == expected

    def test_score_logged(self, sample_project, all_criteria, captured_logs):
        calculate_confidence_score(sample_project, all_criteria, CAPITALIZE)
        record = next(r for r in captured_logs() if r["message"] == "confidence_score_calculated")
        assert record["raw_score"] == 110
        assert record["score"] == 100


class TestRecommendation:

    @pytest.mark.parametrize("score, band", [
        (100, Recommendation.CAPITALIZE),
        (70, Recommendation.CAPITALIZE),
        (69, Recommendation.REVIEW),
        (50, Recommendation.REVIEW),
        (49, Recommendation.EXPENSE),
        (0, Recommendation.EXPENSE),
    ])
    def test_bands(self, score, band):
        assert recommend(score) == band

    def test_capitalize_text(self):
        detail = build_recommendation(85)
        assert detail.title == "資産計上を推奨"
        assert detail.detail == "判定スコア: 85点 (70点以上で推奨)"

    def test_review_text(self):
        detail = build_recommendation(60)
        assert detail.recommendation == Recommendation.REVIEW
        assert detail.title == "慎重な検討が必要"
        assert detail.detail == "判定スコア: 60点 (50-69点は要検討)"

    def test_expense_text(self):
        detail = build_recommendation(30)
        assert detail.title == "費用計上を推奨"
        assert detail.message == "基準を満たしていない項目が多いため、費用計上が適切です。"
