"""
inventory_engines.metrics -- Cost, reorder and risk metrics for one item.

Responsibility:
    Validate the raw attributes of one inventory item and derive its
    planned/actual amounts, variance, reorder level, reorder quantity,
    risk score and risk category.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import inventory_kernel.
    Consumed by the caller's create/update flows before persisting an item.

Invariants enforced:
    - Determinism: identical inputs produce identical outputs. Products and
      sums are exact (EXACT_CONTEXT); the risk ratio is divided at a fixed
      28 digits (RATIO_CONTEXT). The caller's decimal context is never used.
    - Validation precedes computation; a rejected input produces nothing.
    - ``risk_score`` is clamped to the policy bounds (default [0, 100]).
    - ``reorder_qty`` is never negative.
    - Category boundaries: Critical is strictly above the critical
      threshold; Warning is at or above the warning threshold. A score of
      exactly 70 is Warning, exactly 40 is Warning.

Failure modes:
    - ValidationError, checked in this order:
        "Item name is required"                 blank or missing name
        "Quantities and rates must be positive" planned/actual qty or rate < 0
        "Stock values must be positive"         stock, consumption, lead time
                                                or safety stock < 0
        "Lead time cannot exceed 365 days"      lead time above the policy limit
      plus "<field> must be a number" for values that are not numbers and
      "<field> is out of range" for a magnitude of 10**18 or above, or for
      more than 18 decimal places.

Usage:
    from inventory_engines.metrics import compute_metrics

    item = compute_metrics({
        "itemName": "Bearing 6204",
        "plannedQty": 10, "plannedRate": 5,
        "actualQty": 12, "actualRate": 5,
        "currentStock": 20, "dailyConsumption": 4,
        "leadTime": 10, "safetyStock": 15,
    })
    item.reorder_qty    # Decimal("35")
    item.risk_category  # RiskCategory.WARNING
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, localcontext
from typing import Any

from inventory_kernel.domain.item import InventoryItem, RawItemInput, RiskCategory
from inventory_kernel.domain.policy import MetricsPolicy
from inventory_kernel.domain.values import (
    EXACT_CONTEXT,
    HUNDRED,
    RATIO_CONTEXT,
    ZERO,
    clamp,
    to_decimal,
)
from inventory_kernel.exceptions import ValidationError
from inventory_kernel.logging_config import get_logger
from inventory_engines.tracer import traced_engine

logger = get_logger("engines.metrics")

_COST_FIELDS = ("planned_qty", "planned_rate", "actual_qty", "actual_rate")
_STOCK_FIELDS = ("current_stock", "daily_consumption", "lead_time", "safety_stock")

ITEM_NAME_REQUIRED = "Item name is required"
QUANTITIES_NOT_NEGATIVE = "Quantities and rates must be positive"
STOCK_NOT_NEGATIVE = "Stock values must be positive"


def _as_raw(raw: RawItemInput | Mapping[str, Any]) -> RawItemInput:
    if isinstance(raw, RawItemInput):
        return raw
    return RawItemInput.from_mapping(raw)


class MetricsEngine:
    """
    Pure function calculator for per-item inventory metrics.

    Contract:
        No I/O, no database access, no clock. The policy is passed in at
        construction and never changes.
    Guarantees:
        - ``compute`` returns a fully computed ``InventoryItem`` or raises
          ``ValidationError``; there is no partially computed result.
        - Formulas:
            planned_amount = planned_qty * planned_rate
            actual_amount  = actual_qty * actual_rate
            variance       = actual_amount - planned_amount
            reorder_level  = daily_consumption * lead_time + safety_stock
            reorder_qty    = max(0, reorder_level - current_stock)
            risk_score     = clamp((reorder_level - current_stock)
                                   / reorder_level * 100, 0, 100)
                             or 0 when reorder_level is 0
    Non-goals:
        - Does not know about owners, identifiers or timestamps.
        - Does not persist anything.
    """

    def __init__(self, policy: MetricsPolicy | None = None):
        self.policy = policy or MetricsPolicy.with_defaults()

    def classify(self, risk_score: Decimal) -> RiskCategory:
        """Map a clamped risk score to its category."""
        if risk_score > self.policy.critical_threshold:
            return RiskCategory.CRITICAL
        if risk_score >= self.policy.warning_threshold:
            return RiskCategory.WARNING
        return RiskCategory.SAFE

    def validate(self, raw: RawItemInput | Mapping[str, Any]) -> dict[str, Any]:
        """
        Check every precondition and return the coerced attributes.

        Returns:
            Mapping of attribute name to value: the trimmed ``item_name``
            and ``Decimal`` for every numeric attribute.

        Raises:
            ValidationError: On the first violated rule.
        """
        raw = _as_raw(raw)

        name = raw.item_name
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("item_name", ITEM_NAME_REQUIRED, name)
        values: dict[str, Any] = {"item_name": name.strip()}

        for group, reason in (
            (_COST_FIELDS, QUANTITIES_NOT_NEGATIVE),
            (_STOCK_FIELDS, STOCK_NOT_NEGATIVE),
        ):
            for field in group:
                values[field] = to_decimal(field, getattr(raw, field))
            for field in group:
                if values[field] < ZERO:
                    raise ValidationError(field, reason, values[field])

        limit = self.policy.max_lead_time_days
        if values["lead_time"] > limit:
            raise ValidationError(
                "lead_time",
                f"Lead time cannot exceed {limit} days",
                values["lead_time"],
            )
        return values

    @traced_engine("metrics", "1.0", fingerprint_fields=("raw",))
    def compute(self, raw: RawItemInput | Mapping[str, Any]) -> InventoryItem:
        """
        Validate ``raw`` and derive every metric.

        Preconditions:
            ``raw`` is a ``RawItemInput`` or a mapping with snake_case or
            wire (camelCase) keys.

        Postconditions:
            Returns an ``InventoryItem`` with all derived fields set.

        Raises:
            ValidationError: If any precondition fails.
        """
        try:
            v = self.validate(raw)
        except ValidationError as exc:
            logger.warning("metrics_validation_failed", extra={
                "field": exc.field,
                "reason": exc.reason,
            })
            raise

        with localcontext(EXACT_CONTEXT):
            planned_amount = v["planned_qty"] * v["planned_rate"]
            actual_amount = v["actual_qty"] * v["actual_rate"]
            variance = actual_amount - planned_amount

            reorder_level = v["daily_consumption"] * v["lead_time"] + v["safety_stock"]
            shortfall = reorder_level - v["current_stock"]
            reorder_qty = max(ZERO, shortfall)

        risk_score = ZERO
        if reorder_level > ZERO:
            with localcontext(RATIO_CONTEXT):
                risk_score = (shortfall / reorder_level) * HUNDRED

        risk_score = clamp(
            risk_score,
            self.policy.risk_score_floor,
            self.policy.risk_score_ceiling,
        )

        risk_category = self.classify(risk_score)

        logger.info("metrics_computed", extra={
            "item_name": v["item_name"],
            "variance": str(variance),
            "reorder_level": str(reorder_level),
            "reorder_qty": str(reorder_qty),
            "risk_score": str(risk_score),
            "risk_category": risk_category.value,
        })

        return InventoryItem(
            **v,
            planned_amount=planned_amount,
            actual_amount=actual_amount,
            variance=variance,
            reorder_level=reorder_level,
            reorder_qty=reorder_qty,
            risk_score=risk_score,
            risk_category=risk_category,
        )

    def recompute(
        self,
        item: InventoryItem,
        raw: RawItemInput | Mapping[str, Any],
    ) -> InventoryItem:
        """
        Replace an item after a full re-submission of its raw inputs.

        Nothing is carried over from ``item``; partial updates are not
        supported, so ``raw`` must contain every attribute.
        """
        logger.debug("metrics_recompute_requested", extra={
            "previous_item_name": item.item_name,
        })
        return self.compute(raw)


_DEFAULT_ENGINE = MetricsEngine()


def compute_metrics(
    raw: RawItemInput | Mapping[str, Any],
    policy: MetricsPolicy | None = None,
) -> InventoryItem:
    """Compute one item with ``policy`` (production defaults when omitted)."""
    engine = _DEFAULT_ENGINE if policy is None else MetricsEngine(policy)
    return engine.compute(raw)
