"""
devcost_engines.explanation -- Narrative text accompanying a generated journal entry.

Four paragraphs, chosen by phase and treatment: the cost statement, the
phase rationale, a criteria summary (capitalize only) and the business
impact.  Empty paragraphs are dropped; the rest are joined by a blank
line.
"""

from __future__ import annotations

from decimal import Decimal

from devcost_engines.depreciation import AMORTIZATION_YEARS, annual_depreciation
from devcost_kernel.domain.project import (
    AccountingDecision,
    AccountingTreatment,
    DecisionCriteria,
    DevelopmentPhase,
    Project,
)

PARAGRAPH_SEPARATOR = "\n\n"


def format_yen(amount: Decimal) -> str:
    """Thousands-separated amount, e.g. ``10,000,000``."""
    return f"{amount:,f}"


def cost_statement(project: Project, treatment: AccountingTreatment) -> str:
    booked_as = (
        "費用として即時計上しました"
        if treatment == AccountingTreatment.EXPENSE
        else "ソフトウェア資産として計上しました"
    )
    return f"{project.name}の開発費用 {format_yen(project.cost)}円を{booked_as}。"


def phase_rationale(phase: DevelopmentPhase, treatment: AccountingTreatment) -> str:
    if phase == DevelopmentPhase.REQUIREMENTS:
        return "要件定義・設計段階では、将来の経済的便益が不確実なため、通常は費用として計上されます。"
    if phase == DevelopmentPhase.DEVELOPMENT:
        if treatment == AccountingTreatment.CAPITALIZE:
            return "開発・テスト段階では、資産計上の要件を満たす場合にソフトウェア資産として計上できます。"
        return "開発・テスト段階ですが、資産計上の要件を満たさないため費用として計上しました。"
    if phase == DevelopmentPhase.MAINTENANCE:
        return "運用・保守段階での費用は、既存システムの機能維持にかかる費用として扱われ、通常は費用計上されます。"
    return ""


def criteria_summary(criteria: DecisionCriteria) -> str:
    satisfied = criteria.satisfied_count
    ratio = f"{satisfied}/{criteria.total_count}"
    if satisfied >= 3:
        return f"資産計上の判断基準 {ratio} 項目を満たしており、資産計上が適切です。"
    if satisfied >= 2:
        return f"資産計上の判断基準 {ratio} 項目を満たしていますが、より慎重な検討が必要です。"
    return f"資産計上の判断基準 {ratio} 項目のみの満足のため、費用計上が適切です。"


def business_impact(project: Project, treatment: AccountingTreatment) -> str:
    if treatment == AccountingTreatment.EXPENSE:
        return (
            f"当期の営業利益は {format_yen(project.cost)}円 減少しますが、将来年度への影響はありません。"
            "税務上の損金算入により、税負担軽減効果も期待できます。"
        )
    annual = annual_depreciation(project.cost)
    return (
        f"当期の営業利益への影響は減価償却費 {format_yen(annual)}円の減少に留まり、"
        f"残りは今後{AMORTIZATION_YEARS}年間に渡って費用配分されます。"
        "これにより期間損益の平準化が図れます。"
    )


def generate_explanation(
    project: Project,
    treatment: AccountingTreatment,
    decision: AccountingDecision,
) -> str:
    paragraphs = [
        cost_statement(project, treatment),
        phase_rationale(project.phase, treatment),
        criteria_summary(decision.criteria) if treatment == AccountingTreatment.CAPITALIZE else "",
        business_impact(project, treatment),
    ]
    return PARAGRAPH_SEPARATOR.join(p for p in paragraphs if p)
