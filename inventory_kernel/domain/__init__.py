"""
Pure domain layer of the inventory kernel.

Value objects only: no I/O, no clock, no persistence identity.
"""

from inventory_kernel.domain.item import (
    DERIVED_FIELD_NAMES,
    RAW_FIELD_NAMES,
    InventoryItem,
    RawItemInput,
    RiskCategory,
)
from inventory_kernel.domain.policy import MetricsPolicy
from inventory_kernel.domain.summary import (
    DashboardSummary,
    PortfolioSummary,
    RiskAlert,
    RiskDistribution,
)
from inventory_kernel.domain.values import HUNDRED, ZERO, clamp, round_percent, to_decimal

__all__ = [
    "DERIVED_FIELD_NAMES",
    "RAW_FIELD_NAMES",
    "InventoryItem",
    "RawItemInput",
    "RiskCategory",
    "MetricsPolicy",
    "DashboardSummary",
    "PortfolioSummary",
    "RiskAlert",
    "RiskDistribution",
    "HUNDRED",
    "ZERO",
    "clamp",
    "round_percent",
    "to_decimal",
]
