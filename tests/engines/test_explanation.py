"""Tests for the decision explanation text."""

from dataclasses import replace
from decimal import Decimal

from devcost_engines.explanation import (
    PARAGRAPH_SEPARATOR,
    criteria_summary,
    format_yen,
    generate_explanation,
    phase_rationale,
)
from devcost_kernel.domain.project import (
    AccountingDecision,
    AccountingTreatment,
    DecisionCriteria,
    DevelopmentPhase,
)


def _decision(project, treatment, criteria):
    return AccountingDecision(phase=project.phase, treatment=treatment, criteria=criteria)


class TestFormatting:

    def test_thousands_separator(self):
        assert format_yen(Decimal("10000000")) == "10,000,000"
        assert format_yen(Decimal("2000000")) == "2,000,000"


class TestExplanation:

    def test_expense_has_three_paragraphs(self, sample_project, all_criteria):
        text = generate_explanation(
            sample_project,
            AccountingTreatment.EXPENSE,
            _decision(sample_project, AccountingTreatment.EXPENSE, all_criteria),
        )
        paragraphs = text.split(PARAGRAPH_SEPARATOR)

        assert len(paragraphs) == 3
        assert paragraphs[0] == "顧客管理システムの開発費用 10,000,000円を費用として即時計上しました。"
        assert "資産計上の要件を満たさない" in paragraphs[1]
        assert "将来年度への影響はありません" in paragraphs[2]

    def test_capitalize_includes_criteria_summary(self, sample_project, all_criteria):
        text = generate_explanation(
            sample_project,
            AccountingTreatment.CAPITALIZE,
            _decision(sample_project, AccountingTreatment.CAPITALIZE, all_criteria),
        )
        paragraphs = text.split(PARAGRAPH_SEPARATOR)

        assert len(paragraphs) == 4
        assert "ソフトウェア資産として計上しました" in paragraphs[0]
        assert "4/4" in paragraphs[2]
        assert "減価償却費 2,000,000円" in paragraphs[3]
        assert "今後5年間" in paragraphs[3]

    def test_maintenance_phase_rationale(self, sample_project, no_criteria):
        project = replace(sample_project, phase=DevelopmentPhase.MAINTENANCE)
        text = generate_explanation(
            project,
            AccountingTreatment.EXPENSE,
            _decision(project, AccountingTreatment.EXPENSE, no_criteria),
        )
        assert "運用・保守段階" in text

    def test_requirements_phase_rationale(self):
        text = phase_rationale(DevelopmentPhase.REQUIREMENTS, AccountingTreatment.EXPENSE)
        assert text.startswith("要件定義・設計段階")


class TestCriteriaSummary:

    def test_three_or_more(self):
        criteria = DecisionCriteria(True, True, True, False)
        assert criteria_summary(criteria).endswith("資産計上が適切です。")

    def test_two_needs_review(self):
        criteria = DecisionCriteria(True, True, False, False)
        assert "より慎重な検討が必要です" in criteria_summary(criteria)

    def test_fewer_than_two(self):
        criteria = DecisionCriteria(True, False, False, False)
        assert "1/4" in criteria_summary(criteria)
        assert criteria_summary(criteria).endswith("費用計上が適切です。")
