"""
Project Validation Configuration Schema.

Thresholds used by the project form validator.  Defaults reproduce the
rules of the project entry form; override per deployment:

    config = ProjectValidationConfig(high_cost_warning=Decimal("200000000"))
"""

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Self

from devcost_kernel.logging_config import get_logger

logger = get_logger("modules.projects.config")


@dataclass
class ProjectValidationConfig:
    """Configuration schema for project form validation."""

    # Cost warnings (yen)
    low_cost_warning: Decimal = Decimal("1000000")
    high_cost_warning: Decimal = Decimal("100000000")

    # Duration warning (months)
    long_duration_warning: int = 24

    # Cost breakdown must sum to cost within this fraction of cost
    breakdown_tolerance: Decimal = Decimal("0.01")

    # Personnel share that triggers a warning on the project form
    project_personnel_ratio_warning: Decimal = Decimal("0.8")

    # Shares that trigger warnings on the breakdown editor
    breakdown_personnel_ratio_warning: Decimal = Decimal("0.7")
    breakdown_external_ratio_warning: Decimal = Decimal("0.6")

    def __post_init__(self):
        if self.breakdown_tolerance < 0:
            raise ValueError("breakdown_tolerance cannot be negative")
        if self.low_cost_warning > self.high_cost_warning:
            raise ValueError("low_cost_warning cannot exceed high_cost_warning")
        logger.debug(
            "project_validation_config_initialized",
            extra={
                "low_cost_warning": str(self.low_cost_warning),
                "high_cost_warning": str(self.high_cost_warning),
                "long_duration_warning": self.long_duration_warning,
                "breakdown_tolerance": str(self.breakdown_tolerance),
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the form's standard thresholds."""
        logger.info("project_validation_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary (e.g., loaded from a YAML file)."""
        logger.info(
            "project_validation_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        types = {f.name: f.type for f in fields(cls)}
        converted = {}
        for key, value in data.items():
            if types.get(key) is Decimal:
                value = Decimal(str(value))
            elif types.get(key) is int:
                value = int(value)
            converted[key] = value
        return cls(**converted)
