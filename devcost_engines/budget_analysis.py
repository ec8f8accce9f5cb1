"""
devcost_engines.budget_analysis -- Category mix, monthly spread, risks and savings ideas for a budget.

Responsibility:
    Analyze a list of budget line items: amount and share per category,
    planned spend per month, a fixed rule table of budget risks and a
    fixed rule table of cost-saving recommendations.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel.  Rule thresholds are passed in as a
    ``BudgetRules`` value; the modules layer builds it from configuration.

Invariants enforced:
    - Every category appears in the breakdown, with zero amounts when no
      item uses it.
    - The monthly distribution always has twelve months.
    - Rules are evaluated in a fixed order, so risk and recommendation
      lists are deterministic.
    - An empty or zero-total budget yields no risks and zero percentages
      rather than dividing by zero.

Failure modes:
    - None raised.

Usage:
    from devcost_engines.budget_analysis import analyze_budget

    analysis = analyze_budget(items)
    [r.id for r in analysis.risks]  # e.g. ["high-personnel-ratio"]
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.amounts import ZERO, percent, round_amount, safe_divide, sum_amounts
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.budget_analysis")

MONTHS_IN_PLAN = 12


class BudgetCategory(str, Enum):
    PERSONNEL = "personnel"  # 人件費
    EXTERNAL = "external"  # 外注費
    INFRASTRUCTURE = "infrastructure"  # インフラ費
    SOFTWARE = "software"  # ソフトウェアライセンス
    HARDWARE = "hardware"  # ハードウェア
    TRAVEL = "travel"  # 旅費交通費
    TRAINING = "training"  # 研修費
    OTHER = "other"  # その他


class RiskCategory(str, Enum):
    COST = "cost"
    SCHEDULE = "schedule"
    RESOURCE = "resource"
    EXTERNAL = "external"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RecommendationType(str, Enum):
    COST_REDUCTION = "cost_reduction"
    EFFICIENCY = "efficiency"
    RISK_MITIGATION = "risk_mitigation"
    OPTIMIZATION = "optimization"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class MonthlySchedule:
    month: int  # 1-12
    planned_amount: Decimal
    actual_amount: Decimal | None = None
    note: str = ""


@dataclass(frozen=True)
class BudgetItem:
    """One budget line: quantity x unit price, spread over months."""

    id: str
    category: BudgetCategory
    subcategory: str
    description: str
    unit_price: Decimal
    quantity: Decimal
    unit: str
    total_amount: Decimal
    is_fixed: bool = False
    schedule: tuple[MonthlySchedule, ...] = ()
    notes: str = ""

    def planned_in_month(self, month: int) -> Decimal:
        return sum_amounts(s.planned_amount for s in self.schedule if s.month == month)

    def planned_through_month(self, month: int) -> Decimal:
        return sum_amounts(s.planned_amount for s in self.schedule if s.month <= month)


@dataclass(frozen=True)
class CategoryBreakdown:
    amount: Decimal
    percentage: Decimal
    items: int


@dataclass(frozen=True)
class MonthlyBudget:
    month: int
    planned_amount: Decimal


@dataclass(frozen=True)
class BudgetRisk:
    id: str
    category: RiskCategory
    severity: Severity
    description: str
    impact: str
    mitigation: str
    probability: int  # 0-100


@dataclass(frozen=True)
class BudgetRecommendation:
    id: str
    type: RecommendationType
    title: str
    description: str
    expected_savings: Decimal
    implementation_cost: Decimal
    priority: Priority


@dataclass(frozen=True)
class BudgetRules:
    """
    Thresholds of the risk and recommendation rule tables.

    Ratios are fractions of the total budget; ``*_percent`` values are
    percentages of the total budget.
    """

    personnel_ratio_limit: Decimal = Decimal("0.7")
    external_ratio_limit: Decimal = Decimal("0.5")
    large_item_ratio: Decimal = Decimal("0.2")
    front_loaded_share: Decimal = Decimal("0.6")  # of an item's amount in Q1
    front_loaded_item_ratio: Decimal = Decimal("0.3")  # of all items
    front_loaded_months: int = 3
    infrastructure_percent_limit: Decimal = Decimal("15")
    infrastructure_savings_rate: Decimal = Decimal("0.2")
    software_percent_limit: Decimal = Decimal("10")
    software_savings_rate: Decimal = Decimal("0.15")
    training_percent_limit: Decimal = Decimal("5")
    training_savings_rate: Decimal = Decimal("0.3")
    phased_execution_threshold: Decimal = Decimal("50000000")
    phased_execution_savings_rate: Decimal = Decimal("0.05")


@dataclass(frozen=True)
class BudgetAnalysis:
    total_budget: Decimal
    category_breakdown: dict[BudgetCategory, CategoryBreakdown]
    monthly_distribution: tuple[MonthlyBudget, ...]
    risks: tuple[BudgetRisk, ...] = ()
    recommendations: tuple[BudgetRecommendation, ...] = ()


def category_breakdown(
    items: Sequence[BudgetItem],
    total_budget: Decimal,
) -> dict[BudgetCategory, CategoryBreakdown]:
    breakdown: dict[BudgetCategory, CategoryBreakdown] = {}
    for category in BudgetCategory:
        members = [item for item in items if item.category == category]
        amount = sum_amounts(item.total_amount for item in members)
        breakdown[category] = CategoryBreakdown(
            amount=amount,
            percentage=percent(amount, total_budget),
            items=len(members),
        )
    return breakdown


def monthly_distribution(items: Sequence[BudgetItem]) -> tuple[MonthlyBudget, ...]:
    return tuple(
        MonthlyBudget(
            month=month,
            planned_amount=sum_amounts(item.planned_in_month(month) for item in items),
        )
        for month in range(1, MONTHS_IN_PLAN + 1)
    )


def generate_budget_risks(
    items: Sequence[BudgetItem],
    total_budget: Decimal,
    rules: BudgetRules | None = None,
) -> tuple[BudgetRisk, ...]:
    """Evaluate the risk rule table against ``items``."""
    rules = rules or BudgetRules()
    if total_budget <= ZERO:
        return ()

    def category_ratio(category: BudgetCategory) -> Decimal:
        amount = sum_amounts(i.total_amount for i in items if i.category == category)
        return safe_divide(amount, total_budget)

    risks: list[BudgetRisk] = []

    if category_ratio(BudgetCategory.PERSONNEL) > rules.personnel_ratio_limit:
        risks.append(BudgetRisk(
            id="high-personnel-ratio",
            category=RiskCategory.COST,
            severity=Severity.MEDIUM,
            description="人件費比率が70%を超過",
            impact="人員計画変更時の予算への大きな影響",
            mitigation="外部リソース活用の検討、スキル向上による効率化",
            probability=60,
        ))

    if category_ratio(BudgetCategory.EXTERNAL) > rules.external_ratio_limit:
        risks.append(BudgetRisk(
            id="high-external-dependency",
            category=RiskCategory.EXTERNAL,
            severity=Severity.HIGH,
            description="外部委託比率が50%を超過",
            impact="ベンダー依存による品質・スケジュールリスク",
            mitigation="内製化推進、複数ベンダーの確保",
            probability=75,
        ))

    if any(i.total_amount > total_budget * rules.large_item_ratio for i in items):
        risks.append(BudgetRisk(
            id="large-budget-items",
            category=RiskCategory.COST,
            severity=Severity.MEDIUM,
            description="単一項目で全体の20%以上を占める予算項目が存在",
            impact="当該項目の変動が全体予算に大きく影響",
            mitigation="詳細な見積もり精度向上、段階的実行の検討",
            probability=40,
        ))

    front_loaded = [
        i for i in items
        if i.planned_through_month(rules.front_loaded_months)
        > i.total_amount * rules.front_loaded_share
    ]
    if len(front_loaded) > len(items) * rules.front_loaded_item_ratio:
        risks.append(BudgetRisk(
            id="schedule-front-loaded",
            category=RiskCategory.SCHEDULE,
            severity=Severity.MEDIUM,
            description="プロジェクト初期に予算が集中",
            impact="初期段階での予算執行遅延リスク",
            mitigation="段階的な予算執行計画の策定",
            probability=50,
        ))

    return tuple(risks)


def generate_budget_recommendations(
    breakdown: dict[BudgetCategory, CategoryBreakdown],
    total_budget: Decimal,
    rules: BudgetRules | None = None,
) -> tuple[BudgetRecommendation, ...]:
    """Evaluate the recommendation rule table against a category breakdown."""
    rules = rules or BudgetRules()
    recommendations: list[BudgetRecommendation] = []

    infrastructure = breakdown[BudgetCategory.INFRASTRUCTURE]
    if infrastructure.percentage > rules.infrastructure_percent_limit:
        recommendations.append(BudgetRecommendation(
            id="optimize-infrastructure",
            type=RecommendationType.COST_REDUCTION,
            title="インフラコスト最適化",
            description="クラウドリソースの最適化、予約インスタンス活用による費用削減",
            expected_savings=round_amount(infrastructure.amount * rules.infrastructure_savings_rate),
            implementation_cost=Decimal("50000"),
            priority=Priority.HIGH,
        ))

    software = breakdown[BudgetCategory.SOFTWARE]
    if software.percentage > rules.software_percent_limit:
        recommendations.append(BudgetRecommendation(
            id="consolidate-licenses",
            type=RecommendationType.EFFICIENCY,
            title="ソフトウェアライセンス統合",
            description="類似ツールの統合、ボリュームディスカウントの活用",
            expected_savings=round_amount(software.amount * rules.software_savings_rate),
            implementation_cost=Decimal("30000"),
            priority=Priority.MEDIUM,
        ))

    training = breakdown[BudgetCategory.TRAINING]
    if training.percentage > rules.training_percent_limit:
        recommendations.append(BudgetRecommendation(
            id="optimize-training",
            type=RecommendationType.EFFICIENCY,
            title="研修プログラム効率化",
            description="オンライン研修の活用、内製研修の推進",
            expected_savings=round_amount(training.amount * rules.training_savings_rate),
            implementation_cost=Decimal("20000"),
            priority=Priority.MEDIUM,
        ))

    if total_budget > rules.phased_execution_threshold:
        recommendations.append(BudgetRecommendation(
            id="phased-execution",
            type=RecommendationType.RISK_MITIGATION,
            title="段階的プロジェクト実行",
            description="プロジェクトを複数フェーズに分割し、リスク軽減と品質向上",
            expected_savings=round_amount(total_budget * rules.phased_execution_savings_rate),
            implementation_cost=Decimal("100000"),
            priority=Priority.HIGH,
        ))

    return tuple(recommendations)


@traced_engine("budget_analysis", "1.0")
def analyze_budget(
    items: Sequence[BudgetItem],
    rules: BudgetRules | None = None,
) -> BudgetAnalysis:
    """Full analysis of a budget: breakdown, monthly spread, risks, recommendations."""
    t0 = time.monotonic()
    rules = rules or BudgetRules()
    logger.info("budget_analysis_started", extra={"item_count": len(items)})

    total_budget = sum_amounts(item.total_amount for item in items)
    breakdown = category_breakdown(items, total_budget)
    analysis = BudgetAnalysis(
        total_budget=total_budget,
        category_breakdown=breakdown,
        monthly_distribution=monthly_distribution(items),
        risks=generate_budget_risks(items, total_budget, rules),
        recommendations=generate_budget_recommendations(breakdown, total_budget, rules),
    )

    duration_ms = round((time.monotonic() - t0) * 1000, 2)
    logger.info("budget_analysis_completed", extra={
        "total_budget": str(total_budget),
        "risk_ids": [r.id for r in analysis.risks],
        "recommendation_ids": [r.id for r in analysis.recommendations],
        "duration_ms": duration_ms,
    })
    return analysis
