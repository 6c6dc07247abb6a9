"""
Module: inventory_engines.aggregation
Responsibility:
    Roll fully computed inventory items into portfolio-level results:
    cost/variance totals, risk-bucket counts, projected monthly loss,
    the dashboard payload and per-item risk alerts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import inventory_kernel.

Invariants enforced:
    - Read-only fold: the input is materialised once per call and never
      mutated; it may be any iterable, including a one-shot generator.
    - Decimal-only sums in ``EXACT_CONTEXT``: totals are exact across mixed
      magnitudes and do not depend on the caller's decimal context.
    - An empty collection yields zero totals and zero counts, never None.
    - Every element must be a fully computed ``InventoryItem``; anything
      else raises ``InvariantError`` before any total is produced.

Failure modes:
    - InvariantError when an element is not an ``InventoryItem`` or lacks
      a derived field (it bypassed the metrics engine).

Usage:
    from inventory_engines.aggregation import AggregationService

    service = AggregationService()
    summary = service.cost_summary(items)
    summary.projected_monthly_loss  # total_variance * 30, or 0
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import localcontext

from inventory_kernel.domain.item import InventoryItem, RiskCategory
from inventory_kernel.domain.policy import MetricsPolicy
from inventory_kernel.domain.summary import (
    DashboardSummary,
    PortfolioSummary,
    RiskAlert,
    RiskDistribution,
)
from inventory_kernel.domain.values import EXACT_CONTEXT, ZERO, round_percent
from inventory_kernel.exceptions import InvariantError
from inventory_kernel.logging_config import get_logger
from inventory_engines.tracer import traced_engine

logger = get_logger("engines.aggregation")


def _require_computed(items: Iterable[InventoryItem]) -> tuple[InventoryItem, ...]:
    """Materialise ``items`` and check every element went through the engine."""
    materialised = tuple(items)
    for position, item in enumerate(materialised):
        if not isinstance(item, InventoryItem):
            logger.error("aggregation_invalid_item_type", extra={
                "position": position,
                "item_type": type(item).__name__,
            })
            raise InvariantError(
                position, "InventoryItem", f"got {type(item).__name__}"
            )
        missing = item.missing_derived_fields
        if missing:
            logger.error("aggregation_item_not_computed", extra={
                "position": position,
                "item_name": item.item_name,
                "missing_fields": list(missing),
            })
            raise InvariantError(position, missing[0])
    return materialised


class AggregationService:
    """
    Pure fold over a collection of computed items.

    Contract:
        No I/O, no sorting, no filtering by owner. Ownership scoping and
        "recent" ordering are the caller's responsibility.
    Guarantees:
        - ``total_planned_cost``, ``total_actual_cost`` and
          ``total_variance`` are exact Decimal sums.
        - ``critical_item_count == critical_count``.
        - ``critical_count + warning_count + safe_count == len(items)``.
        - ``projected_monthly_loss`` is ``total_variance * 30`` when the
          total variance is positive, else 0; only set by the cost-summary
          variant.
    Non-goals:
        - Does not fetch or cache items.
    """

    def __init__(self, policy: MetricsPolicy | None = None):
        self.policy = policy or MetricsPolicy.with_defaults()

    def _fold(self, items: Sequence[InventoryItem], include_projection: bool) -> PortfolioSummary:
        total_planned = ZERO
        total_actual = ZERO
        total_variance = ZERO
        counts = {category: 0 for category in RiskCategory}

        with localcontext(EXACT_CONTEXT):
            for item in items:
                total_planned += item.planned_amount
                total_actual += item.actual_amount
                total_variance += item.variance
                counts[item.risk_category] += 1

            projected = None
            if include_projection:
                projected = ZERO
                if total_variance > ZERO:
                    projected = total_variance * self.policy.loss_projection_days

        return PortfolioSummary(
            total_planned_cost=total_planned,
            total_actual_cost=total_actual,
            total_variance=total_variance,
            critical_item_count=counts[RiskCategory.CRITICAL],
            critical_count=counts[RiskCategory.CRITICAL],
            warning_count=counts[RiskCategory.WARNING],
            safe_count=counts[RiskCategory.SAFE],
            projected_monthly_loss=projected,
        )

    @traced_engine("aggregation", "1.0")
    def summarize(
        self,
        items: Iterable[InventoryItem],
        include_projection: bool = False,
    ) -> PortfolioSummary:
        """
        Aggregate totals and risk-bucket counts.

        Args:
            items: Fully computed items of one owner.
            include_projection: Also compute ``projected_monthly_loss``.

        Raises:
            InvariantError: If an item was never computed.
        """
        materialised = _require_computed(items)
        summary = self._fold(materialised, include_projection)

        logger.info("portfolio_summarized", extra={
            "item_count": len(materialised),
            "total_variance": str(summary.total_variance),
            "critical_count": summary.critical_count,
            "warning_count": summary.warning_count,
            "safe_count": summary.safe_count,
            "include_projection": include_projection,
        })
        return summary

    def cost_summary(self, items: Iterable[InventoryItem]) -> PortfolioSummary:
        """Totals with the projected monthly loss."""
        return self.summarize(items, include_projection=True)

    @traced_engine("aggregation", "1.0", fingerprint_fields=("limit",))
    def dashboard_summary(
        self,
        items: Iterable[InventoryItem],
        recent: Iterable[InventoryItem] | None = None,
        limit: int | None = None,
    ) -> DashboardSummary:
        """
        Totals over ``items`` plus the first ``limit`` recent items.

        ``recent`` must already be ordered newest first by the caller; when
        omitted the first ``limit`` of ``items`` are used in their given
        order. ``limit`` defaults to the policy's dashboard limit (10).
        """
        if limit is None:
            limit = self.policy.dashboard_recent_limit
        if limit < 0:
            raise ValueError("limit cannot be negative")

        materialised = _require_computed(items)
        if recent is None:
            recent_items = materialised[:limit]
        else:
            recent_items = _require_computed(recent)[:limit]

        summary = self._fold(materialised, include_projection=False)
        logger.info("dashboard_summarized", extra={
            "item_count": len(materialised),
            "recent_count": len(recent_items),
            "critical_item_count": summary.critical_item_count,
        })
        return DashboardSummary(summary=summary, recent_items=recent_items)

    def risk_distribution(self, items: Iterable[InventoryItem]) -> RiskDistribution:
        """Item counts per risk category."""
        return self.summarize(items).distribution

    def risk_alerts(
        self,
        items: Iterable[InventoryItem],
        minimum: RiskCategory = RiskCategory.WARNING,
    ) -> tuple[RiskAlert, ...]:
        """
        Alerts for items whose category is at least ``minimum``, in input order.

        Critical items are flagged ``stock_out_imminent``.
        """
        materialised = _require_computed(items)
        alerts = tuple(
            RiskAlert(
                item_name=item.item_name,
                risk_category=item.risk_category,
                risk_score=item.risk_score,
                risk_percent=round_percent(item.risk_score),
                reorder_qty=item.reorder_qty,
                stock_out_imminent=item.risk_category is RiskCategory.CRITICAL,
            )
            for item in materialised
            if item.risk_category.severity >= minimum.severity
        )
        logger.info("risk_alerts_built", extra={
            "item_count": len(materialised),
            "alert_count": len(alerts),
            "minimum": minimum.value,
        })
        return alerts


_DEFAULT_SERVICE = AggregationService()


def summarize(
    items: Iterable[InventoryItem],
    include_projection: bool = False,
    policy: MetricsPolicy | None = None,
) -> PortfolioSummary:
    """Module-level shortcut for ``AggregationService.summarize``."""
    service = _DEFAULT_SERVICE if policy is None else AggregationService(policy)
    return service.summarize(items, include_projection=include_projection)
