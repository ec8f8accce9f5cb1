"""
devcost_engines.confidence -- Heuristic 0-100 score for a capitalization decision.

Responsibility:
    Combine the four capitalization criteria with project attributes
    (complexity, risk, cost, duration) into an integer score, and map the
    score onto a recommendation band.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import devcost_kernel.

Invariants enforced:
    - Score is an int clamped to [0, 100] for any input.
    - Point constants and band thresholds are fixed; they are the
      observable contract of the recommendation.

Failure modes:
    - None raised.

Usage:
    from devcost_engines.confidence import calculate_confidence_score, recommend

    score = calculate_confidence_score(project, criteria, AccountingTreatment.CAPITALIZE)
    recommend(score)  # Recommendation.CAPITALIZE when score >= 70
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from devcost_engines.tracer import traced_engine
from devcost_kernel.domain.project import (
    AccountingTreatment,
    DecisionCriteria,
    Project,
    ProjectComplexity,
    RiskLevel,
)
from devcost_kernel.logging_config import get_logger

logger = get_logger("engines.confidence")

BASE_SCORE = 50
POINTS_PER_CRITERION = 15
MAX_SCORED_CRITERIA = 4

COMPLEXITY_ADJUSTMENT = {
    ProjectComplexity.HIGH: -10,
    ProjectComplexity.MEDIUM: 0,
    ProjectComplexity.LOW: 5,
}

RISK_ADJUSTMENT = {
    RiskLevel.HIGH: -15,
    RiskLevel.MEDIUM: 0,
    RiskLevel.LOW: 10,
}

LARGE_COST_THRESHOLD = Decimal("50000000")
LARGE_COST_POINTS = 10
SMALL_COST_THRESHOLD = Decimal("5000000")
SMALL_COST_POINTS = -5

LONG_DURATION_MONTHS = 12
LONG_DURATION_POINTS = 5
SHORT_DURATION_MONTHS = 3
SHORT_DURATION_POINTS = -10

CAPITALIZE_THRESHOLD = 70
REVIEW_THRESHOLD = 50


class Recommendation(str, Enum):
    """Band a confidence score falls into."""

    CAPITALIZE = "capitalize"
    REVIEW = "review"
    EXPENSE = "expense"


@dataclass(frozen=True)
class RecommendationDetail:
    """Recommendation band with its display text."""

    recommendation: Recommendation
    score: int
    title: str
    message: str
    detail: str


_RECOMMENDATION_TEXT = {
    Recommendation.CAPITALIZE: (
        "資産計上を推奨",
        "多くの判断基準を満たしており、資産計上が適切と考えられます。",
        "70点以上で推奨",
    ),
    Recommendation.REVIEW: (
        "慎重な検討が必要",
        "いくつかの基準を満たしていますが、より詳細な検討が必要です。",
        "50-69点は要検討",
    ),
    Recommendation.EXPENSE: (
        "費用計上を推奨",
        "基準を満たしていない項目が多いため、費用計上が適切です。",
        "50点未満は費用計上推奨",
    ),
}


@traced_engine(
    "confidence", "1.0", fingerprint_fields=("project", "criteria", "treatment"),
)
def calculate_confidence_score(
    project: Project,
    criteria: DecisionCriteria,
    treatment: AccountingTreatment,
) -> int:
    """
    Additive point score for the decision.

    ``treatment`` does not change the points; it is recorded with the
    score for tracing.
    """
    satisfied = min(criteria.satisfied_count, MAX_SCORED_CRITERIA)
    score = BASE_SCORE + satisfied * POINTS_PER_CRITERION

    score += COMPLEXITY_ADJUSTMENT[project.complexity]
    score += RISK_ADJUSTMENT[project.risk_level]

    if project.cost > LARGE_COST_THRESHOLD:
        score += LARGE_COST_POINTS
    elif project.cost < SMALL_COST_THRESHOLD:
        score += SMALL_COST_POINTS

    if project.duration > LONG_DURATION_MONTHS:
        score += LONG_DURATION_POINTS
    elif project.duration < SHORT_DURATION_MONTHS:
        score += SHORT_DURATION_POINTS

    clamped = max(0, min(100, score))
    logger.info("confidence_score_calculated", extra={
        "project_id": project.id,
        "treatment": treatment.value,
        "satisfied_criteria": satisfied,
        "raw_score": score,
        "score": clamped,
    })
    return clamped


def recommend(score: int) -> Recommendation:
    if score >= CAPITALIZE_THRESHOLD:
        return Recommendation.CAPITALIZE
    if score >= REVIEW_THRESHOLD:
        return Recommendation.REVIEW
    return Recommendation.EXPENSE


def build_recommendation(score: int) -> RecommendationDetail:
    """Recommendation band plus the title and message shown to the user."""
    band = recommend(score)
    title, message, band_note = _RECOMMENDATION_TEXT[band]
    return RecommendationDetail(
        recommendation=band,
        score=score,
        title=title,
        message=message,
        detail=f"判定スコア: {score}点 ({band_note})",
    )
