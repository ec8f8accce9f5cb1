"""
Pytest fixtures for the devcost test suite.

Provides:
- Structured logging configured once per session, with per-test capture
- A deterministic clock
- Sample projects, decision criteria and the baseline statement
"""

import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest

from devcost_kernel.domain.clock import DeterministicClock
from devcost_kernel.domain.project import (
    CostBreakdown,
    DecisionCriteria,
    DevelopmentPhase,
    Project,
    ProjectComplexity,
    RiskLevel,
)
from devcost_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from devcost_modules.reporting.sample import load_sample_statement


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture devcost_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            generate_depreciation_schedule(Decimal("1000000"))
            logs = captured_logs()
            assert any(r["message"] == "depreciation_schedule_calculated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("devcost_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(datetime(2025, 4, 1, 9, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def sample_project():
    """A 10M yen development-phase project with a consistent breakdown."""
    return Project(
        id="proj-001",
        name="顧客管理システム",
        description="既存顧客管理システムの全面刷新",
        cost=Decimal("10000000"),
        duration=12,
        phase=DevelopmentPhase.DEVELOPMENT,
        team_size=5,
        industry="小売",
        complexity=ProjectComplexity.MEDIUM,
        risk_level=RiskLevel.MEDIUM,
        cost_breakdown=CostBreakdown(
            personnel=Decimal("6000000"),
            external=Decimal("2000000"),
            infrastructure=Decimal("1000000"),
            licenses=Decimal("500000"),
            other=Decimal("500000"),
        ),
    )


@pytest.fixture
def all_criteria():
    return DecisionCriteria(
        future_economic_benefit=True,
        technical_feasibility=True,
        completion_intention=True,
        adequate_resources=True,
    )


@pytest.fixture
def no_criteria():
    return DecisionCriteria()


@pytest.fixture
def baseline_statement():
    return load_sample_statement()
