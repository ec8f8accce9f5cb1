"""
Projects Module (``devcost_modules.projects``).

Responsibility
--------------
Project form validation and its threshold configuration.  Form-level
problems are returned as structured ``ValidationResult`` values, never
raised.
"""

from devcost_modules.projects.config import ProjectValidationConfig
from devcost_modules.projects.validation import (
    ValidationCode,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_cost_breakdown,
    validate_project,
)

__all__ = [
    "ProjectValidationConfig",
    "ValidationCode",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_cost_breakdown",
    "validate_project",
]
