"""
Pytest fixtures for the inventory metrics test suite.

Provides:
- Structured logging configured once per session
- LogContext isolation between tests
- ``captured_logs`` for asserting on emitted JSON records
- Raw input builders for the metrics engine
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from inventory_engines.aggregation import AggregationService
from inventory_engines.metrics import MetricsEngine
from inventory_kernel.domain.item import RawItemInput
from inventory_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


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
    Capture inventory_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, engine):
            engine.compute(raw)
            logs = captured_logs()
            assert any(r["message"] == "metrics_computed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("inventory_kernel")
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
# Engine fixtures
# =============================================================================


@pytest.fixture
def engine() -> MetricsEngine:
    return MetricsEngine()


@pytest.fixture
def aggregator() -> AggregationService:
    return AggregationService()


def make_raw(**overrides) -> RawItemInput:
    """Raw input for the reference item, with selected attributes replaced."""
    values = {
        "item_name": "Hex Bolt M8",
        "planned_qty": Decimal("10"),
        "planned_rate": Decimal("5"),
        "actual_qty": Decimal("12"),
        "actual_rate": Decimal("5"),
        "current_stock": Decimal("20"),
        "daily_consumption": Decimal("4"),
        "lead_time": Decimal("10"),
        "safety_stock": Decimal("15"),
    }
    values.update(overrides)
    return RawItemInput(**values)


@pytest.fixture
def raw_factory():
    """Factory for raw inputs; see ``make_raw``."""
    return make_raw


@pytest.fixture
def item_factory(engine):
    """Factory returning computed items built from ``make_raw`` overrides."""

    def _make(**overrides):
        return engine.compute(make_raw(**overrides))

    return _make
