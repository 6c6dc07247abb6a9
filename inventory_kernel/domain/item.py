"""
Inventory Item Value Objects (``inventory_kernel.domain.item``).

Responsibility
--------------
Frozen value objects for one tracked item: the caller-supplied raw record
(``RawItemInput``) and the fully computed record (``InventoryItem``) carrying
the derived cost, reorder and risk fields.

Architecture
------------
Layer: **Kernel** -- pure domain data structures. No I/O, no identity, no
ownership. Persistence keys (item id, owner id, timestamps) belong to the
storage collaborator, which may wrap these objects but never alters them.

Invariants
----------
- Derived fields are produced only by ``inventory_engines.metrics``; an item
  rebuilt from storage without them is "awaiting recomputation" and is
  rejected by the aggregation service.
- Items are immutable. An update is a full re-submission of raw inputs that
  yields a new ``InventoryItem``.
- All numeric fields are ``Decimal`` once computed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Any, Self

from inventory_kernel.exceptions import ValidationError
from inventory_kernel.domain.values import (
    MAX_DERIVED_DECIMAL_PLACES,
    MAX_DERIVED_INTEGER_DIGITS,
    NumberLike,
    to_decimal,
)


class RiskCategory(str, Enum):
    """Bucketed risk score."""

    SAFE = "Safe"
    WARNING = "Warning"
    CRITICAL = "Critical"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    RiskCategory.SAFE: 0,
    RiskCategory.WARNING: 1,
    RiskCategory.CRITICAL: 2,
}


# Python attribute -> camelCase wire name used in request and storage payloads
RAW_FIELD_NAMES: dict[str, str] = {
    "item_name": "itemName",
    "planned_qty": "plannedQty",
    "planned_rate": "plannedRate",
    "actual_qty": "actualQty",
    "actual_rate": "actualRate",
    "current_stock": "currentStock",
    "daily_consumption": "dailyConsumption",
    "lead_time": "leadTime",
    "safety_stock": "safetyStock",
}

DERIVED_FIELD_NAMES: dict[str, str] = {
    "planned_amount": "plannedAmount",
    "actual_amount": "actualAmount",
    "variance": "variance",
    "reorder_level": "reorderLevel",
    "reorder_qty": "reorderQty",
    "risk_score": "riskScore",
    "risk_category": "riskCategory",
}


def _lookup(data: Mapping[str, Any], name: str, wire_name: str) -> Any:
    if name in data:
        return data[name]
    return data.get(wire_name)


@dataclass(frozen=True)
class RawItemInput:
    """
    Raw attributes submitted for one item.

    Values are stored as given; the metrics engine coerces and validates
    them. A ``None`` value means the caller did not supply the attribute.
    """

    item_name: str | None
    planned_qty: NumberLike | None
    planned_rate: NumberLike | None
    actual_qty: NumberLike | None
    actual_rate: NumberLike | None
    current_stock: NumberLike | None
    daily_consumption: NumberLike | None
    lead_time: NumberLike | None
    safety_stock: NumberLike | None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """
        Build a raw record from a request body or stored document.

        Accepts snake_case attribute names or the camelCase wire names
        (``itemName``, ``plannedQty``, ...). Missing keys become ``None`` and
        are reported by the engine's validation. Unrelated keys are ignored.
        """
        if not isinstance(data, Mapping):
            raise ValidationError("input", "Item input must be a mapping", data)
        return cls(**{
            name: _lookup(data, name, wire)
            for name, wire in RAW_FIELD_NAMES.items()
        })

    def to_dict(self) -> dict[str, Any]:
        """Render with wire names."""
        return {wire: getattr(self, name) for name, wire in RAW_FIELD_NAMES.items()}


@dataclass(frozen=True)
class InventoryItem:
    """
    One tracked item with its derived metrics.

    Contract: Immutable value object. When built by the metrics engine every
    derived field is set and consistent with the raw fields. The derived
    fields default to ``None`` only so that records read back from storage
    can be represented before recomputation.
    """

    item_name: str
    planned_qty: Decimal
    planned_rate: Decimal
    actual_qty: Decimal
    actual_rate: Decimal
    current_stock: Decimal
    daily_consumption: Decimal
    lead_time: Decimal
    safety_stock: Decimal
    planned_amount: Decimal | None = None
    actual_amount: Decimal | None = None
    variance: Decimal | None = None
    reorder_level: Decimal | None = None
    reorder_qty: Decimal | None = None
    risk_score: Decimal | None = None
    risk_category: RiskCategory | None = None

    @property
    def missing_derived_fields(self) -> tuple[str, ...]:
        """Derived attributes that have not been computed."""
        return tuple(
            name for name in DERIVED_FIELD_NAMES
            if getattr(self, name) is None
        )

    @property
    def is_computed(self) -> bool:
        return not self.missing_derived_fields

    def raw_input(self) -> RawItemInput:
        """The raw record this item was computed from, for re-submission."""
        return RawItemInput(**{name: getattr(self, name) for name in RAW_FIELD_NAMES})

    def to_dict(self) -> dict[str, Any]:
        """Render every attribute with wire names; the category as its label."""
        result: dict[str, Any] = {}
        for f in fields(self):
            wire = RAW_FIELD_NAMES.get(f.name) or DERIVED_FIELD_NAMES[f.name]
            value = getattr(self, f.name)
            if isinstance(value, RiskCategory):
                value = value.value
            result[wire] = value
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """
        Rehydrate a stored record without recomputing it.

        Raw attributes are taken as stored. Derived attributes are copied
        when present; absent ones stay ``None`` so the aggregation service
        can detect an item that never went through the engine.
        """
        values: dict[str, Any] = {}
        for name, wire in RAW_FIELD_NAMES.items():
            value = _lookup(data, name, wire)
            if value is None:
                raise ValidationError(name, f"{name} is required", None)
            values[name] = value if name == "item_name" else to_decimal(name, value)
        for name, wire in DERIVED_FIELD_NAMES.items():
            value = _lookup(data, name, wire)
            if value is None:
                continue
            if name == "risk_category":
                values[name] = RiskCategory(value)
            else:
                values[name] = to_decimal(
                    name,
                    value,
                    integer_digits=MAX_DERIVED_INTEGER_DIGITS,
                    decimal_places=MAX_DERIVED_DECIMAL_PLACES,
                )
        return cls(**values)
