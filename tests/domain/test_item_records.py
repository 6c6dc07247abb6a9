"""
Tests for the inventory item value objects.

Covers:
- RawItemInput construction from wire and snake_case mappings
- InventoryItem wire rendering and rehydration
- Derived-field completeness
- RiskCategory ordering
"""

from decimal import Decimal

import pytest

from tests.conftest import make_raw
from inventory_kernel.domain.item import (
    DERIVED_FIELD_NAMES,
    InventoryItem,
    RawItemInput,
    RiskCategory,
)
from inventory_kernel.exceptions import ValidationError


class TestRawItemInput:

    def test_from_wire_mapping(self):
        raw = RawItemInput.from_mapping({
            "itemName": "Gasket",
            "plannedQty": 1,
            "plannedRate": 2,
            "actualQty": 3,
            "actualRate": 4,
            "currentStock": 5,
            "dailyConsumption": 6,
            "leadTime": 7,
            "safetyStock": 8,
            "userId": "ignored",
        })

        assert raw.item_name == "Gasket"
        assert raw.safety_stock == 8

    def test_snake_case_wins_over_wire(self):
        raw = RawItemInput.from_mapping({"lead_time": 3, "leadTime": 9})

        assert raw.lead_time == 3

    def test_missing_keys_are_none(self):
        raw = RawItemInput.from_mapping({"itemName": "Gasket"})

        assert raw.planned_qty is None
        assert raw.safety_stock is None

    def test_non_mapping_rejected(self):
        with pytest.raises(ValidationError):
            RawItemInput.from_mapping(["itemName", "Gasket"])

    def test_to_dict_uses_wire_names(self):
        payload = make_raw().to_dict()

        assert payload["itemName"] == "Hex Bolt M8"
        assert payload["dailyConsumption"] == Decimal("4")


class TestInventoryItem:

    def test_to_dict_round_trip(self, engine):
        item = engine.compute(make_raw())

        assert InventoryItem.from_dict(item.to_dict()) == item

    def test_round_trip_at_input_limits(self, engine):
        largest = Decimal("999999999999999999")
        item = engine.compute(make_raw(
            planned_qty=largest,
            planned_rate=largest,
            daily_consumption=largest,
            lead_time=Decimal("365"),
            current_stock=Decimal("0.000000000000000001"),
        ))

        assert InventoryItem.from_dict(item.to_dict()) == item

    def test_to_dict_category_label(self, engine):
        payload = engine.compute(make_raw()).to_dict()

        assert payload["riskCategory"] == "Warning"
        assert payload["reorderQty"] == Decimal("35")
        assert set(DERIVED_FIELD_NAMES.values()) <= set(payload)

    def test_from_dict_without_derived_fields(self):
        item = InventoryItem.from_dict(make_raw().to_dict())

        assert not item.is_computed
        assert item.missing_derived_fields == tuple(DERIVED_FIELD_NAMES)

    def test_from_dict_missing_raw_field(self):
        payload = make_raw().to_dict()
        del payload["safetyStock"]

        with pytest.raises(ValidationError) as exc_info:
            InventoryItem.from_dict(payload)

        assert exc_info.value.field == "safety_stock"

    def test_from_dict_accepts_stored_floats(self):
        payload = make_raw().to_dict()
        payload["currentStock"] = 20.5

        item = InventoryItem.from_dict(payload)

        assert item.current_stock == Decimal("20.5")

    def test_raw_input_matches_fields(self, engine):
        item = engine.compute(make_raw(item_name="  Gasket "))

        raw = item.raw_input()
        assert raw.item_name == "Gasket"
        assert raw.lead_time == Decimal("10")


class TestRiskCategory:

    def test_labels(self):
        assert RiskCategory("Critical") is RiskCategory.CRITICAL
        assert RiskCategory.SAFE.value == "Safe"

    def test_severity_order(self):
        assert (
            RiskCategory.SAFE.severity
            < RiskCategory.WARNING.severity
            < RiskCategory.CRITICAL.severity
        )

    def test_unknown_label(self):
        with pytest.raises(ValueError):
            RiskCategory("Unknown")
