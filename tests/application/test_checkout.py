"""Tests for the client-side checkout pre-validation."""

from datetime import datetime, timezone

import pytest

from wms.application.checkout import CheckoutForm, build_order_payload, cart_total
from wms.application.dto import OrderItemSpec
from wms.domain.exceptions import InsufficientStockError, ValidationError
from wms.domain.model.value_objects import Money

NOW = datetime(2024, 5, 1, 9, 30, 0, tzinfo=timezone.utc)

PRODUCTS = [
    {"id": "1", "name": "Widget", "price": 10000, "warehouseId": "1", "availableStock": 100},
    {"id": "2", "name": "Gadget", "price": 5000, "warehouseId": "1", "availableStock": 3},
    {"id": "3", "name": "Remote", "price": 7500, "warehouseId": "2", "availableStock": 10},
]

FORM = CheckoutForm(customer_id="C-1", customer_name=" Alice ", warehouse_id="1", notes="rush")


class TestBuildOrderPayload:

    def test_payload_shape(self):
        payload = build_order_payload(
            FORM, [OrderItemSpec("1", 2), OrderItemSpec("2", 3)], PRODUCTS, NOW
        )
        assert payload == {
            "order_number": "ORD20240501093000",
            "customer_id": "C-1",
            "customer_name": "Alice",
            "warehouse_id": "1",
            "items": [
                {"product_id": "1", "quantity": 2},
                {"product_id": "2", "quantity": 3},
            ],
            "notes": "rush",
            "expires_at": "2024-05-01T10:30:00+00:00",
        }

    def test_merges_repeated_lines(self):
        payload = build_order_payload(
            FORM, [OrderItemSpec("1", 2), OrderItemSpec("1", 2)], PRODUCTS, NOW
        )
        assert payload["items"] == [{"product_id": "1", "quantity": 4}]

    def test_more_than_available_rejected(self):
        with pytest.raises(InsufficientStockError, match="Available: 3, Requested: 4"):
            build_order_payload(FORM, [OrderItemSpec("2", 4)], PRODUCTS, NOW)

    def test_product_from_other_warehouse_rejected(self):
        with pytest.raises(ValidationError, match="not stocked"):
            build_order_payload(FORM, [OrderItemSpec("3", 1)], PRODUCTS, NOW)

    def test_empty_cart_rejected(self):
        with pytest.raises(ValidationError, match="Cart is empty"):
            build_order_payload(FORM, [], PRODUCTS, NOW)

    def test_missing_warehouse_rejected(self):
        form = CheckoutForm(customer_id="C-1", customer_name="Alice", warehouse_id="")
        with pytest.raises(ValidationError, match="Warehouse is required"):
            build_order_payload(form, [OrderItemSpec("1", 1)], PRODUCTS, NOW)


class TestCartTotal:

    def test_sums_lines(self):
        total = cart_total([OrderItemSpec("1", 2), OrderItemSpec("2", 3)], PRODUCTS)
        assert total == Money.of("35000")
