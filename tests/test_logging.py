"""Tests for the structured logging system (inventory_kernel/logging_config.py)."""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from inventory_kernel.domain.item import RiskCategory
from inventory_kernel.exceptions import ValidationError
from inventory_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    """Parse all JSON log lines from a stream."""
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "inventory_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("computed", extra={"reorder_qty": 35, "item_name": "Gasket"})

        record = _parse_log(stream)
        assert record["reorder_qty"] == 35
        assert record["item_name"] == "Gasket"

    def test_decimal_and_enum_serialised(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("computed", extra={
            "risk_score": Decimal("63.64"),
            "risk_category": RiskCategory.WARNING,
        })

        record = _parse_log(stream)
        assert record["risk_score"] == "63.64"
        assert record["risk_category"] == "Warning"

    def test_exception_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        try:
            raise ValidationError("lead_time", "Lead time cannot exceed 365 days", Decimal("400"))
        except ValidationError:
            logger.exception("rejected")

        record = _parse_log(stream)
        assert record["exc_type"] == "ValidationError"
        assert record["exc_code"] == "VALIDATION_ERROR"
        assert record["exc_field"] == "lead_time"
        assert record["exc_value"] == "400"
        assert "traceback" in record


class TestLogContext:

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        LogContext.set(owner_id="owner-1", item_id="item-9")
        get_logger("test").info("with_context")

        record = _parse_log(stream)
        assert record["owner_id"] == "owner-1"
        assert record["item_id"] == "item-9"

    def test_bind_restores_previous_values(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        LogContext.set(owner_id="outer")

        with LogContext.bind(owner_id="inner", item_id="item-1"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = _parse_all_logs(stream)
        assert inside["owner_id"] == "inner"
        assert inside["item_id"] == "item-1"
        assert outside["owner_id"] == "outer"
        assert "item_id" not in outside

    def test_bind_rejects_unknown_field(self):
        with pytest.raises(TypeError):
            LogContext.bind(tenant="x")

    def test_request_id_is_not_a_context_field(self):
        with pytest.raises(TypeError):
            LogContext.bind(request_id="req-1")

    def test_clear(self):
        LogContext.set(correlation_id="c-1")
        LogContext.clear()

        assert LogContext.get_all() == {}


class TestConfigureLogging:

    def test_idempotent(self):
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        configure_logging(handler=handler)

        assert len(logging.getLogger("inventory_kernel").handlers) == 1

    def test_reset_clears_handlers(self):
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        reset_logging()

        assert logging.getLogger("inventory_kernel").handlers == []
