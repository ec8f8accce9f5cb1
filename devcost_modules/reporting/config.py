"""
Reporting Configuration Schema.

Where the baseline statement comes from and how it is labelled.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Self

from devcost_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")

DEFAULT_SAMPLE_STATEMENT_PATH = Path(__file__).parent / "data" / "sample_statement.yaml"


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls the baseline statement and report labelling.
    """

    # Baseline statement reference data
    sample_statement_path: Path = DEFAULT_SAMPLE_STATEMENT_PATH

    # Overrides the period label of the loaded statement when set
    period_label: str | None = None

    # Entity name shown on reports
    entity_name: str = "サンプル株式会社"

    def __post_init__(self):
        if self.period_label is not None and not self.period_label.strip():
            raise ValueError("period_label cannot be blank")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create config from dictionary."""
        data = dict(data)
        if "sample_statement_path" in data:
            data["sample_statement_path"] = Path(data["sample_statement_path"])
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)
