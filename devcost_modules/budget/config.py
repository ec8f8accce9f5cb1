"""
Budget Analysis Configuration Schema.

Rule thresholds for the budget risk and recommendation tables and the
location of the budget template file.  Defaults reproduce the budget
planner's rules.
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from pathlib import Path
from typing import Self

from devcost_engines.budget_analysis import BudgetRules
from devcost_kernel.logging_config import get_logger

logger = get_logger("modules.budget.config")

DEFAULT_TEMPLATES_PATH = Path(__file__).parent / "data" / "templates.yaml"


@dataclass
class BudgetAnalysisConfig:
    """
    Configuration schema for the budget module.

    Override at instantiation:

        config = BudgetAnalysisConfig(
            rules=BudgetRules(personnel_ratio_limit=Decimal("0.75")),
        )
    """

    rules: BudgetRules = field(default_factory=BudgetRules)

    # Template reference data
    templates_path: Path = DEFAULT_TEMPLATES_PATH

    # Months over which a template item is spread, starting at month 1
    template_spread_months: int = 6

    def __post_init__(self):
        if not 1 <= self.template_spread_months <= 12:
            raise ValueError("template_spread_months must be between 1 and 12")
        logger.debug(
            "budget_analysis_config_initialized",
            extra={
                "templates_path": str(self.templates_path),
                "template_spread_months": self.template_spread_months,
                "personnel_ratio_limit": str(self.rules.personnel_ratio_limit),
                "external_ratio_limit": str(self.rules.external_ratio_limit),
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the budget planner's standard rules."""
        logger.info("budget_analysis_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary (e.g., loaded from a YAML file)."""
        data = dict(data)
        if "rules" in data and isinstance(data["rules"], dict):
            decimal_fields = {
                f.name for f in fields(BudgetRules) if f.name != "front_loaded_months"
            }
            data["rules"] = BudgetRules(**{
                key: (Decimal(str(value)) if key in decimal_fields else int(value))
                for key, value in data["rules"].items()
            })
        if "templates_path" in data:
            data["templates_path"] = Path(data["templates_path"])
        logger.info(
            "budget_analysis_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
