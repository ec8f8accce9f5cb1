"""
Budget Templates (``devcost_modules.budget.templates``).

Responsibility
--------------
Turn a project type and a total budget into starter budget items: one
lump-sum item per category, sized by the template's category share and
spread evenly over the first months of the year.

Architecture position
---------------------
**Modules layer** -- reads YAML reference data, builds engine value
objects (``BudgetItem``).  No calculation beyond rounding.

Invariants enforced
-------------------
* Categories with a zero rounded amount produce no item.
* Item ids are ``template-{n}`` where ``n`` is the category position in
  the template, so ids are stable when a category is skipped.
* Personnel items are fixed costs; every other item is variable.

Failure modes
-------------
* ``TemplateNotFoundError`` for an unknown project type.
* ``FileNotFoundError`` / ``yaml.YAMLError`` for a missing or broken
  template file.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

from devcost_engines.budget_analysis import (
    MONTHS_IN_PLAN,
    BudgetCategory,
    BudgetItem,
    MonthlySchedule,
)
from devcost_kernel.domain.amounts import ZERO, round_amount, to_amount
from devcost_kernel.exceptions import TemplateNotFoundError
from devcost_kernel.logging_config import get_logger
from devcost_modules._reference_data import load_yaml_file
from devcost_modules.budget.config import BudgetAnalysisConfig

logger = get_logger("modules.budget.templates")

LUMP_SUM_UNIT = "LS"


def load_templates(path: Path) -> dict[str, Any]:
    return load_yaml_file(path)


def available_template_types(config: BudgetAnalysisConfig | None = None) -> tuple[str, ...]:
    config = config or BudgetAnalysisConfig()
    return tuple(load_templates(config.templates_path).get("templates", {}))


def _spread(amount: Decimal, months: int) -> tuple[MonthlySchedule, ...]:
    monthly = round_amount(amount / months)
    return tuple(
        MonthlySchedule(month=month, planned_amount=monthly if month <= months else ZERO)
        for month in range(1, MONTHS_IN_PLAN + 1)
    )


def generate_budget_template(
    project_type: str,
    total_budget: Decimal,
    config: BudgetAnalysisConfig | None = None,
) -> tuple[BudgetItem, ...]:
    """
    Build starter budget items for ``project_type``.

    Raises:
        TemplateNotFoundError: If no template exists for ``project_type``.
    """
    config = config or BudgetAnalysisConfig()
    data = load_templates(config.templates_path)
    templates = data.get("templates", {})
    if project_type not in templates:
        logger.warning("budget_template_not_found", extra={
            "project_type": project_type,
            "available": sorted(templates),
        })
        raise TemplateNotFoundError(project_type, tuple(templates))

    ratios = templates[project_type]
    subcategories = data.get("subcategories", {})
    descriptions = data.get("descriptions", {})
    notes = data.get("notes", "").format(project_type=project_type)

    items: list[BudgetItem] = []
    for index, (category_key, ratio) in enumerate(ratios.items()):
        category = BudgetCategory(category_key)
        amount = round_amount(total_budget * to_amount(ratio))
        if amount <= ZERO:
            continue
        items.append(BudgetItem(
            id=f"template-{index}",
            category=category,
            subcategory=subcategories.get(category_key, ""),
            description=descriptions.get(category_key, "").format(project_type=project_type),
            unit_price=amount,
            quantity=Decimal("1"),
            unit=LUMP_SUM_UNIT,
            total_amount=amount,
            is_fixed=category == BudgetCategory.PERSONNEL,
            schedule=_spread(amount, config.template_spread_months),
            notes=notes,
        ))

    logger.info("budget_template_generated", extra={
        "project_type": project_type,
        "total_budget": str(total_budget),
        "item_count": len(items),
    })
    return tuple(items)
