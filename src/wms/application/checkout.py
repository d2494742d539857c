"""Client-side checkout: pre-validate a cart, then build the order request.

Works on product records as the REST API returns them (camelCase keys), so
an out-of-stock line is rejected before anything is submitted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from wms.application.create_order import merge_item_specs
from wms.application.dto import OrderItemSpec
from wms.domain.exceptions import InsufficientStockError, ValidationError
from wms.domain.model.order import (
    DEFAULT_EXPIRY_WINDOW,
    MAX_LINE_ITEMS,
    generate_order_number,
)
from wms.domain.model.value_objects import Money


@dataclass(frozen=True)
class CheckoutForm:
    customer_id: str
    customer_name: str
    warehouse_id: str
    notes: str = ""


def _index(products: list[Mapping[str, Any]]) -> dict[str, Mapping[str, Any]]:
    return {str(p["id"]): p for p in products}


def validate_cart(
    form: CheckoutForm,
    cart: list[OrderItemSpec],
    products: list[Mapping[str, Any]],
) -> list[OrderItemSpec]:
    """Return the merged cart, or raise before anything is sent."""
    if not form.customer_id.strip():
        raise ValidationError("Customer ID is required")
    if not form.customer_name.strip():
        raise ValidationError("Customer name is required")
    if not form.warehouse_id:
        raise ValidationError("Warehouse is required")
    if not cart:
        raise ValidationError("Cart is empty")

    lines = merge_item_specs(cart)
    if len(lines) > MAX_LINE_ITEMS:
        raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

    by_id = _index(products)
    for line in lines:
        product = by_id.get(line.product_id)
        if product is None:
            raise ValidationError(f"Unknown product '{line.product_id}'")
        if str(product.get("warehouseId")) != form.warehouse_id:
            raise ValidationError(
                f"Product {product.get('name')} is not stocked in warehouse {form.warehouse_id}"
            )
        available = int(product.get("availableStock", 0))
        if line.quantity > available:
            raise InsufficientStockError(
                f"Insufficient stock for {product.get('name')}. "
                f"Available: {available}, Requested: {line.quantity}"
            )
    return lines


def cart_total(cart: list[OrderItemSpec], products: list[Mapping[str, Any]]) -> Money:
    by_id = _index(products)
    total = Money.zero()
    for line in merge_item_specs(cart):
        product = by_id.get(line.product_id)
        if product is None:
            continue
        total = total + Money.of(product["price"]) * line.quantity
    return total


def build_order_payload(
    form: CheckoutForm,
    cart: list[OrderItemSpec],
    products: list[Mapping[str, Any]],
    now: datetime,
    expires_in: timedelta = DEFAULT_EXPIRY_WINDOW,
) -> dict[str, Any]:
    """Body of ``POST /orders`` for a cart that passed validation."""
    lines = validate_cart(form, cart, products)
    return {
        "order_number": generate_order_number(now),
        "customer_id": form.customer_id.strip(),
        "customer_name": form.customer_name.strip(),
        "warehouse_id": form.warehouse_id,
        "items": [
            {"product_id": line.product_id, "quantity": line.quantity} for line in lines
        ],
        "notes": form.notes.strip(),
        "expires_at": (now + expires_in).isoformat(),
    }
