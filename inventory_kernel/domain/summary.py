"""
Portfolio summary value objects (``inventory_kernel.domain.summary``).

Ephemeral results of the aggregation service. None of them is persisted;
each is computed fresh per call and carries no identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from inventory_kernel.domain.item import InventoryItem, RiskCategory
from inventory_kernel.domain.values import ZERO


@dataclass(frozen=True)
class RiskDistribution:
    """Item counts per risk category. Every category is always present."""

    critical: int = 0
    warning: int = 0
    safe: int = 0

    @property
    def total(self) -> int:
        return self.critical + self.warning + self.safe

    def count(self, category: RiskCategory) -> int:
        if category is RiskCategory.CRITICAL:
            return self.critical
        if category is RiskCategory.WARNING:
            return self.warning
        return self.safe

    def as_dict(self) -> dict[str, int]:
        """Counts keyed by category label, Critical first."""
        return {
            RiskCategory.CRITICAL.value: self.critical,
            RiskCategory.WARNING.value: self.warning,
            RiskCategory.SAFE.value: self.safe,
        }


@dataclass(frozen=True)
class PortfolioSummary:
    """
    Aggregate financial and risk statistics over one owner's items.

    ``projected_monthly_loss`` is ``None`` unless the cost-summary variant
    was requested.
    """

    total_planned_cost: Decimal = ZERO
    total_actual_cost: Decimal = ZERO
    total_variance: Decimal = ZERO
    critical_item_count: int = 0
    critical_count: int = 0
    warning_count: int = 0
    safe_count: int = 0
    projected_monthly_loss: Decimal | None = None

    @property
    def item_count(self) -> int:
        return self.critical_count + self.warning_count + self.safe_count

    @property
    def distribution(self) -> RiskDistribution:
        return RiskDistribution(
            critical=self.critical_count,
            warning=self.warning_count,
            safe=self.safe_count,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "totalPlannedCost": self.total_planned_cost,
            "totalActualCost": self.total_actual_cost,
            "totalVariance": self.total_variance,
            "criticalItemCount": self.critical_item_count,
            "criticalCount": self.critical_count,
            "warningCount": self.warning_count,
            "safeCount": self.safe_count,
        }
        if self.projected_monthly_loss is not None:
            result["projectedMonthlyLoss"] = self.projected_monthly_loss
        return result


@dataclass(frozen=True)
class DashboardSummary:
    """Summary totals plus the caller's most recent items."""

    summary: PortfolioSummary
    recent_items: tuple[InventoryItem, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "recentProducts": [item.to_dict() for item in self.recent_items],
        }


@dataclass(frozen=True)
class RiskAlert:
    """
    Stock alert for one item at or above a minimum risk category.

    ``risk_percent`` is the risk score rounded half-up to a whole percent.
    """

    item_name: str
    risk_category: RiskCategory
    risk_score: Decimal
    risk_percent: int
    reorder_qty: Decimal
    stock_out_imminent: bool
