"""
Project Form Validation (``devcost_modules.projects.validation``).

Responsibility
--------------
Check project input before it reaches the calculators and report every
problem at once as field-level errors and advisory warnings.  Validation
never raises: callers decide what an invalid result means.

Architecture position
---------------------
**Modules layer** -- pure functions over kernel value objects and plain
mappings.  Used by ``AccountingDecisionService`` and by any form/API
handler.

Invariants enforced
-------------------
* ``is_valid`` is True exactly when ``errors`` is empty.
* Cost breakdown must sum to the project cost within the configured
  tolerance (1% by default).

Failure modes
-------------
* None raised.  Unparseable numbers are reported as ``INVALID_VALUE``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from devcost_kernel.domain.amounts import ZERO, safe_divide, sum_amounts, to_amount
from devcost_kernel.domain.project import CostBreakdown, Project
from devcost_kernel.logging_config import get_logger
from devcost_modules.projects.config import ProjectValidationConfig

logger = get_logger("modules.projects.validation")


class ValidationCode(str, Enum):
    REQUIRED_FIELD = "REQUIRED_FIELD"
    INVALID_VALUE = "INVALID_VALUE"
    INCONSISTENT_DATA = "INCONSISTENT_DATA"
    INCONSISTENT_TOTAL = "INCONSISTENT_TOTAL"


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str
    code: ValidationCode


@dataclass(frozen=True)
class ValidationWarning:
    field: str
    message: str
    suggestion: str


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationWarning, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_fields(self) -> tuple[str, ...]:
        return tuple(e.field for e in self.errors)


def _as_mapping(project: Project | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(project, Project):
        return {
            "name": project.name,
            "description": project.description,
            "cost": project.cost,
            "duration": project.duration,
            "team_size": project.team_size,
            # An all-zero breakdown means none was entered.
            "cost_breakdown": (
                project.cost_breakdown.as_dict()
                if any(project.cost_breakdown.as_dict().values()) else None
            ),
        }
    return project


def _pick(data: Mapping[str, Any], snake: str, camel: str | None = None) -> Any:
    if snake in data:
        return data[snake]
    if camel is not None:
        return data.get(camel)
    return None


def _number(value: Any) -> Decimal | None:
    """Parse a form number; None when absent or unparseable."""
    if value is None or value == "":
        return None
    try:
        return to_amount(value)
    except (TypeError, InvalidOperation):
        return None


def validate_project(
    project: Project | Mapping[str, Any],
    config: ProjectValidationConfig | None = None,
) -> ValidationResult:
    """
    Validate a project or raw project form data.

    Mappings may use snake_case or the camelCase keys of the form payload.
    """
    config = config or ProjectValidationConfig()
    data = _as_mapping(project)
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    name = _pick(data, "name")
    if not name or not str(name).strip():
        errors.append(ValidationError(
            "name", "プロジェクト名は必須です", ValidationCode.REQUIRED_FIELD,
        ))

    description = _pick(data, "description")
    if not description or not str(description).strip():
        errors.append(ValidationError(
            "description", "プロジェクトの説明は必須です", ValidationCode.REQUIRED_FIELD,
        ))

    cost = _number(_pick(data, "cost"))
    if cost is None or cost <= ZERO:
        errors.append(ValidationError(
            "cost", "プロジェクト費用は正の数値である必要があります", ValidationCode.INVALID_VALUE,
        ))
        cost = None

    duration = _number(_pick(data, "duration"))
    if duration is None or duration <= ZERO:
        errors.append(ValidationError(
            "duration", "期間は1ヶ月以上である必要があります", ValidationCode.INVALID_VALUE,
        ))
        duration = None

    team_size = _number(_pick(data, "team_size", "teamSize"))
    if team_size is None or team_size <= ZERO:
        errors.append(ValidationError(
            "team_size", "チーム規模は1名以上である必要があります", ValidationCode.INVALID_VALUE,
        ))

    if cost is not None and cost < config.low_cost_warning:
        warnings.append(ValidationWarning(
            "cost",
            "プロジェクト費用が低額です",
            "100万円未満のプロジェクトでは資産計上の検討は通常不要です",
        ))
    if cost is not None and cost > config.high_cost_warning:
        warnings.append(ValidationWarning(
            "cost",
            "プロジェクト費用が高額です",
            "1億円を超えるプロジェクトでは特に慎重な判断が必要です",
        ))
    if duration is not None and duration > config.long_duration_warning:
        warnings.append(ValidationWarning(
            "duration",
            "プロジェクト期間が長期です",
            "2年を超えるプロジェクトでは段階的な資産計上を検討してください",
        ))

    breakdown = _pick(data, "cost_breakdown", "costBreakdown")
    amounts = {key: _number(value) or ZERO for key, value in (breakdown or {}).items()}
    for key, amount in amounts.items():
        if amount < ZERO:
            errors.append(ValidationError(
                f"cost_breakdown.{key}", "費用は負の値にできません", ValidationCode.INVALID_VALUE,
            ))

    if breakdown and cost is not None:
        total = sum_amounts(amounts.values())
        if abs(total - cost) > cost * config.breakdown_tolerance:
            errors.append(ValidationError(
                "cost_breakdown",
                "費用内訳の合計とプロジェクト総費用が一致しません",
                ValidationCode.INCONSISTENT_DATA,
            ))
        personnel = amounts.get("personnel", ZERO)
        if safe_divide(personnel, cost) > config.project_personnel_ratio_warning:
            warnings.append(ValidationWarning(
                "cost_breakdown.personnel",
                "人件費の比率が高すぎます",
                "人件費が80%を超える場合、外部委託の検討をお勧めします",
            ))

    result = ValidationResult(errors=tuple(errors), warnings=tuple(warnings))
    logger.info("project_validated", extra={
        "is_valid": result.is_valid,
        "error_fields": list(result.error_fields()),
        "warning_count": len(result.warnings),
    })
    return result


def validate_cost_breakdown(
    breakdown: CostBreakdown | Mapping[str, Any],
    total_cost: Decimal,
    config: ProjectValidationConfig | None = None,
) -> ValidationResult:
    """Validate a cost breakdown against the project's total cost."""
    config = config or ProjectValidationConfig()
    raw = breakdown.as_dict() if isinstance(breakdown, CostBreakdown) else breakdown
    errors: list[ValidationError] = []
    warnings: list[ValidationWarning] = []

    amounts: dict[str, Decimal] = {}
    for key, value in raw.items():
        amount = _number(value)
        if amount is None:
            continue
        if amount < ZERO:
            errors.append(ValidationError(
                key, "費用は負の値にできません", ValidationCode.INVALID_VALUE,
            ))
        amounts[key] = amount

    total = sum_amounts(amounts.values())
    if abs(total - total_cost) > total_cost * config.breakdown_tolerance:
        errors.append(ValidationError(
            "total",
            f"費用内訳の合計({total:,f}円)とプロジェクト総費用({total_cost:,f}円)が一致しません",
            ValidationCode.INCONSISTENT_TOTAL,
        ))

    if safe_divide(amounts.get("personnel", ZERO), total_cost) > config.breakdown_personnel_ratio_warning:
        warnings.append(ValidationWarning(
            "personnel",
            "人件費の比率が高すぎます",
            "人件費が70%を超える場合、プロジェクト効率化を検討してください",
        ))
    if safe_divide(amounts.get("external", ZERO), total_cost) > config.breakdown_external_ratio_warning:
        warnings.append(ValidationWarning(
            "external",
            "外部委託費の比率が高すぎます",
            "外部委託費が60%を超える場合、内製化の検討をお勧めします",
        ))

    return ValidationResult(errors=tuple(errors), warnings=tuple(warnings))
