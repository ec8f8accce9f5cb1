"""
Tests for devcost_kernel.logging_config.

Covers:
- One JSON object per record, with context and extra fields
- Decimal / UUID / Enum payloads and Japanese account names
- Exception details, including DevCostError attributes
- LogContext set / bind / clear semantics
- configure_logging only ever attaches one handler of its own
"""

import json
import logging
from decimal import Decimal
from io import StringIO
from uuid import uuid4

import pytest

from devcost_kernel.domain.project import AccountingTreatment
from devcost_kernel.exceptions import InvalidProjectError, TreatmentNotPermittedError
from devcost_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def json_stream():
    """Configure logging into a StringIO and return a reader of its records."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    configure_logging(handler=handler, level=logging.DEBUG)

    def read() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return read


class TestRecordShape:

    def test_core_keys(self, json_stream):
        get_logger("engines.ratios").info("ratios_calculated")

        (record,) = json_stream()
        assert record["level"] == "INFO"
        assert record["message"] == "ratios_calculated"
        assert record["logger"] == "devcost_kernel.engines.ratios"
        assert record["ts"].endswith("+00:00")

    def test_extra_and_context_merged(self, json_stream):
        LogContext.set(correlation_id="corr-1", project_id="proj-9")
        get_logger("engines.confidence").info(
            "confidence_scored", extra={"score": 85, "treatment": "capitalize"},
        )

        (record,) = json_stream()
        assert record["score"] == 85
        assert record["treatment"] == "capitalize"
        assert record["correlation_id"] == "corr-1"
        assert record["project_id"] == "proj-9"

    def test_context_absent_when_unbound(self, json_stream):
        get_logger("test").info("bare")

        (record,) = json_stream()
        assert not set(LogContext.FIELDS) & set(record)

    def test_typed_values_written_as_strings(self, json_stream):
        actor = uuid4()
        get_logger("test").info("typed", extra={
            "actor": actor,
            "cost": Decimal("10000000.50"),
            "treatment": AccountingTreatment.EXPENSE,
        })

        (record,) = json_stream()
        assert record["actor"] == str(actor)
        assert record["cost"] == "10000000.50"
        assert record["treatment"] == "expense"

    def test_japanese_kept_readable(self, json_stream):
        get_logger("test").info("account_used", extra={"account": "ソフトウェア資産"})
        (record,) = json_stream()
        assert record["account"] == "ソフトウェア資産"

    def test_level_filtering(self):
        stream = StringIO()
        configure_logging(handler=logging.StreamHandler(stream))
        logger = get_logger("test")
        logger.debug("hidden")
        logger.warning("shown")

        messages = [json.loads(line)["message"] for line in stream.getvalue().splitlines()]
        assert messages == ["shown"]


class TestExceptionFields:

    def test_plain_exception(self, json_stream):
        try:
            raise ValueError("boom")
        except ValueError:
            get_logger("test").error("failed", exc_info=True)

        (record,) = json_stream()
        assert record["exc_type"] == "ValueError"
        assert record["exc_message"] == "boom"
        assert "exc_code" not in record
        assert "Traceback" in record["traceback"]

    def test_devcost_error_details(self, json_stream):
        try:
            raise TreatmentNotPermittedError("maintenance", "capitalize")
        except TreatmentNotPermittedError:
            get_logger("test").error("treatment_rejected", exc_info=True)

        (record,) = json_stream()
        assert record["exc_code"] == "TREATMENT_NOT_PERMITTED"
        assert record["exc_phase"] == "maintenance"
        assert record["exc_treatment"] == "capitalize"

    def test_project_id_carried(self, json_stream):
        try:
            raise InvalidProjectError("proj-7", "project name is required")
        except InvalidProjectError:
            get_logger("test").warning("project_rejected", exc_info=True)

        (record,) = json_stream()
        assert record["exc_code"] == "INVALID_PROJECT"
        assert record["exc_project_id"] == "proj-7"


class TestLogContext:

    def test_set_is_additive(self):
        LogContext.set(correlation_id="a")
        LogContext.set(actor_id="b", tenant_id=None)
        assert LogContext.get_all() == {"correlation_id": "a", "actor_id": "b"}

    def test_every_field_settable(self):
        LogContext.set(**{name: f"v-{name}" for name in LogContext.FIELDS})
        assert len(LogContext.get_all()) == len(LogContext.FIELDS) == 5

    def test_clear(self):
        LogContext.set(project_id="p")
        LogContext.clear()
        assert LogContext.get_all() == {}

    def test_bind_restores_previous_value(self):
        LogContext.set(project_id="outer")
        with LogContext.bind(project_id="inner", actor_id="u-1"):
            assert LogContext.get_all() == {"project_id": "inner", "actor_id": "u-1"}
        assert LogContext.get_all() == {"project_id": "outer"}

    def test_bind_skips_none(self):
        with LogContext.bind(correlation_id="c", project_id=None):
            assert LogContext.get_all() == {"correlation_id": "c"}

    def test_bind_restores_after_exception(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(correlation_id="c"):
                raise RuntimeError("fail inside")
        assert LogContext.get_all() == {}

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError):
            LogContext.set(entry_id="e-1")
        with pytest.raises(TypeError):
            with LogContext.bind(correlation_id="c", entry_id="e-1"):
                pass
        assert LogContext.get_all() == {}


class TestConfigureLogging:

    def test_second_call_is_ignored(self):
        first = logging.StreamHandler(StringIO())
        second = logging.StreamHandler(StringIO())
        configure_logging(handler=first)
        configure_logging(handler=second, level=logging.DEBUG)

        package_logger = logging.getLogger("devcost_kernel")
        # pytest may add its own capture handlers; only ours are counted.
        ours = [h for h in package_logger.handlers if isinstance(h.formatter, StructuredFormatter)]
        assert ours == [first]
        assert second not in package_logger.handlers
        assert package_logger.level == logging.INFO

    def test_does_not_propagate(self):
        configure_logging(handler=logging.StreamHandler(StringIO()))
        assert logging.getLogger("devcost_kernel").propagate is False

    def test_reset_allows_reconfiguration(self):
        configure_logging(handler=logging.StreamHandler(StringIO()))
        reset_logging()
        replacement = logging.StreamHandler(StringIO())
        configure_logging(handler=replacement)
        assert replacement in logging.getLogger("devcost_kernel").handlers

    def test_children_share_the_handler(self, json_stream):
        get_logger("modules.decision.service").debug("nested")
        (record,) = json_stream()
        assert record["logger"] == "devcost_kernel.modules.decision.service"
