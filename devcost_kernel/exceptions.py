"""
Typed exception hierarchy for the devcost kernel.

Every error has a typed class (catch by type, not by message), a ``code``
class attribute (machine-readable, safe to return from an API), and
carries its context as attributes rather than only inside the message.

    DevCostError (base)
    |
    +-- InputError
    |   +-- InvalidInputError
    |   +-- InvalidProjectError
    |
    +-- AccountingError
    |   +-- TreatmentNotPermittedError
    |   +-- UnbalancedEntryError
    |   +-- UnbalancedStatementError
    |
    +-- ReferenceDataError
        +-- TemplateNotFoundError

Category        | Code                     | When Raised
----------------|--------------------------|------------------------------------------
Input           | INVALID_INPUT            | Non-positive amount/term passed to an engine
                | INVALID_PROJECT          | Project fails validation before calculation
----------------|--------------------------|------------------------------------------
Accounting      | TREATMENT_NOT_PERMITTED  | Capitalize requested outside development
                | UNBALANCED_ENTRY         | Generated debits != credits
                | UNBALANCED_STATEMENT     | Assets != liabilities + equity
----------------|--------------------------|------------------------------------------
Reference data  | TEMPLATE_NOT_FOUND       | Unknown budget template type

Form-level validation does NOT raise: ``validate_project`` returns a
``ValidationResult`` with field errors and warnings.  Exceptions are for
input that reaches a calculator in a state it cannot work with.

Usage:
    try:
        outcome = service.evaluate(project, criteria, treatment)
    except InvalidProjectError as e:
        return {"error": e.code, "fields": [err.field for err in e.errors]}
"""

from __future__ import annotations

from typing import Any


class DevCostError(Exception):
    """
    Base exception for all devcost errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "DEVCOST_ERROR"


# Input-related exceptions


class InputError(DevCostError):
    """Base exception for invalid calculator input."""

    code: str = "INPUT_ERROR"


class InvalidInputError(InputError):
    """A calculator argument is outside its valid domain."""

    code: str = "INVALID_INPUT"

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class InvalidProjectError(InputError):
    """
    Project cannot be used for journal generation or decision evaluation.

    ``errors`` holds the field-level validation errors when the rejection
    came from the validator; it is empty for engine-level guards.
    """

    code: str = "INVALID_PROJECT"

    def __init__(self, project_id: str, reason: str, errors: tuple = ()):
        self.project_id = project_id
        self.reason = reason
        self.errors = tuple(errors)
        super().__init__(f"Invalid project {project_id!r}: {reason}")


# Accounting-related exceptions


class AccountingError(DevCostError):
    """Base exception for accounting rule violations."""

    code: str = "ACCOUNTING_ERROR"


class TreatmentNotPermittedError(AccountingError):
    """The requested accounting treatment is not allowed for the phase."""

    code: str = "TREATMENT_NOT_PERMITTED"

    def __init__(self, phase: str, treatment: str):
        self.phase = phase
        self.treatment = treatment
        super().__init__(
            f"Treatment '{treatment}' is not permitted in phase '{phase}'"
        )


class UnbalancedEntryError(AccountingError):
    """Journal entry debits do not equal credits."""

    code: str = "UNBALANCED_ENTRY"

    def __init__(self, debits: str, credits: str):
        self.debits = debits
        self.credits = credits
        super().__init__(
            f"Unbalanced entry: debits={debits}, credits={credits}"
        )


class UnbalancedStatementError(AccountingError):
    """Balance sheet assets do not equal liabilities plus equity."""

    code: str = "UNBALANCED_STATEMENT"

    def __init__(self, total_assets: str, total_liabilities_and_equity: str):
        self.total_assets = total_assets
        self.total_liabilities_and_equity = total_liabilities_and_equity
        super().__init__(
            f"Unbalanced balance sheet: assets={total_assets}, "
            f"liabilities_and_equity={total_liabilities_and_equity}"
        )


# Reference-data exceptions


class ReferenceDataError(DevCostError):
    """Base exception for bundled reference data problems."""

    code: str = "REFERENCE_DATA_ERROR"


class TemplateNotFoundError(ReferenceDataError):
    """No budget template exists for the requested project type."""

    code: str = "TEMPLATE_NOT_FOUND"

    def __init__(self, template_type: str, available: tuple[str, ...]):
        self.template_type = template_type
        self.available = available
        super().__init__(
            f"Unknown budget template '{template_type}'; "
            f"available: {', '.join(available)}"
        )
