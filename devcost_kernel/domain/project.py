"""
Project domain value objects (``devcost_kernel.domain.project``).

Responsibility
--------------
The nouns of an accounting decision: the candidate development project,
its cost breakdown, the phase it is in, the accounting treatment chosen,
the four-factor capitalization criteria, and the resulting decision.

Architecture position
---------------------
**Kernel > Domain** -- pure data definitions with ZERO I/O.  Consumed by
every engine and by the modules layer.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Only the development phase permits a treatment choice; requirements
  and maintenance are always expensed (``permitted_treatments``).

Failure modes
-------------
* Construction with invalid enum values raises ``ValueError``.
* ``ensure_treatment_permitted`` raises ``TreatmentNotPermittedError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from typing import Any

from devcost_kernel.domain.amounts import ZERO, sum_amounts, to_amount
from devcost_kernel.exceptions import TreatmentNotPermittedError


class DevelopmentPhase(str, Enum):
    """Lifecycle phase of a system-development project."""

    REQUIREMENTS = "requirements"
    DEVELOPMENT = "development"
    MAINTENANCE = "maintenance"


class ProjectComplexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AccountingTreatment(str, Enum):
    """How a development cost is recorded."""

    EXPENSE = "expense"  # immediate P&L charge
    CAPITALIZE = "capitalize"  # software asset, amortized


def permitted_treatments(phase: DevelopmentPhase) -> tuple[AccountingTreatment, ...]:
    """Treatments a project in ``phase`` may choose from."""
    if phase == DevelopmentPhase.DEVELOPMENT:
        return (AccountingTreatment.EXPENSE, AccountingTreatment.CAPITALIZE)
    return (AccountingTreatment.EXPENSE,)


def ensure_treatment_permitted(
    phase: DevelopmentPhase,
    treatment: AccountingTreatment,
) -> None:
    """Raise ``TreatmentNotPermittedError`` if ``treatment`` is not allowed."""
    if treatment not in permitted_treatments(phase):
        raise TreatmentNotPermittedError(phase.value, treatment.value)


@dataclass(frozen=True)
class CostBreakdown:
    """Project cost split into five non-negative components."""

    personnel: Decimal = ZERO
    external: Decimal = ZERO
    infrastructure: Decimal = ZERO
    licenses: Decimal = ZERO
    other: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return sum_amounts(getattr(self, f.name) for f in fields(self))

    def as_dict(self) -> dict[str, Decimal]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CostBreakdown:
        return cls(**{
            f.name: to_amount(data.get(f.name, 0)) for f in fields(cls)
        })


@dataclass(frozen=True)
class Project:
    """A candidate system-development effort."""

    id: str
    name: str
    cost: Decimal
    duration: int  # months
    phase: DevelopmentPhase = DevelopmentPhase.DEVELOPMENT
    description: str = ""
    team_size: int = 1
    industry: str = ""
    complexity: ProjectComplexity = ProjectComplexity.MEDIUM
    risk_level: RiskLevel = RiskLevel.MEDIUM
    cost_breakdown: CostBreakdown = field(default_factory=CostBreakdown)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        """
        Build a Project from form/JSON input.

        Accepts both the camelCase keys of the browser payload
        (``teamSize``, ``riskLevel``, ``costBreakdown``) and snake_case.
        """
        def pick(snake: str, camel: str, default: Any = None) -> Any:
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        breakdown = pick("cost_breakdown", "costBreakdown") or {}
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            description=data.get("description", ""),
            phase=DevelopmentPhase(data.get("phase", DevelopmentPhase.DEVELOPMENT.value)),
            cost=to_amount(data.get("cost", 0)),
            duration=int(data.get("duration", 0)),
            team_size=int(pick("team_size", "teamSize", 1)),
            industry=data.get("industry", ""),
            complexity=ProjectComplexity(data.get("complexity", "medium")),
            risk_level=RiskLevel(pick("risk_level", "riskLevel", "medium")),
            cost_breakdown=CostBreakdown.from_dict(breakdown),
        )


@dataclass(frozen=True)
class DecisionCriteria:
    """Simplified four-factor capitalization test."""

    future_economic_benefit: bool = False
    technical_feasibility: bool = False
    completion_intention: bool = False
    adequate_resources: bool = False

    @property
    def satisfied_count(self) -> int:
        return sum(1 for f in fields(self) if getattr(self, f.name))

    @property
    def total_count(self) -> int:
        return len(fields(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DecisionCriteria:
        return cls(
            future_economic_benefit=bool(
                data.get("future_economic_benefit", data.get("futureEconomicBenefit", False))
            ),
            technical_feasibility=bool(
                data.get("technical_feasibility", data.get("technicalFeasibility", False))
            ),
            completion_intention=bool(
                data.get("completion_intention", data.get("completionIntention", False))
            ),
            adequate_resources=bool(
                data.get("adequate_resources", data.get("adequateResources", False))
            ),
        )


@dataclass(frozen=True)
class AccountingDecision:
    """A treatment choice with its supporting criteria and score."""

    phase: DevelopmentPhase
    treatment: AccountingTreatment
    criteria: DecisionCriteria
    reasoning: str = ""
    confidence: int = 0  # 0-100
