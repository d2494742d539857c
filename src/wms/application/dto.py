"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.model.order import Order
from wms.domain.model.product import Product
from wms.domain.model.transaction import Transaction
from wms.domain.model.warehouse import Warehouse

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product record + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_id: str
    product_name: str
    sku: str
    quantity: int
    unit_price: str  # formatted, e.g. "IDR 15,000.00"
    total_price: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    customer_id: str
    customer_name: str
    warehouse_id: str
    status: str
    items: list[OrderLineItemDTO]
    total_amount: str
    created_at: str
    expires_at: str
    notes: str


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    sku: str
    price: str
    warehouse_id: str
    stock: int
    reserved_stock: int
    available_stock: int
    min_stock: int
    category: str
    is_low_stock: bool


@dataclass(frozen=True)
class WarehouseDTO:
    id: str
    name: str
    is_active: bool
    capacity: int
    current_utilization: int
    code: str
    address: str
    manager: str


@dataclass(frozen=True)
class TransactionDTO:
    id: int
    type: str
    product_id: str
    quantity: int
    warehouse_id: str
    to_warehouse_id: str | None
    reference_number: str
    notes: str
    created_by: str
    created_at: str


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_id=order.customer_id,
        customer_name=order.customer_name,
        warehouse_id=order.warehouse_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                sku=item.sku,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                total_price=str(item.total_price),
            )
            for item in order.items
        ],
        total_amount=str(order.total_amount),
        created_at=order.created_at.strftime(TIMESTAMP_FORMAT),
        expires_at=order.expires_at.strftime(TIMESTAMP_FORMAT),
        notes=order.notes,
    )


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        sku=product.sku,
        price=str(product.price),
        warehouse_id=product.warehouse_id,
        stock=product.stock,
        reserved_stock=product.reserved_stock,
        available_stock=product.available_stock,
        min_stock=product.min_stock,
        category=product.category,
        is_low_stock=product.is_low_stock,
    )


def warehouse_to_dto(warehouse: Warehouse, current_utilization: int) -> WarehouseDTO:
    return WarehouseDTO(
        id=warehouse.id,
        name=warehouse.name,
        is_active=warehouse.is_active,
        capacity=warehouse.capacity,
        current_utilization=current_utilization,
        code=warehouse.code,
        address=warehouse.address,
        manager=warehouse.manager,
    )


def transaction_to_dto(entry: Transaction) -> TransactionDTO:
    return TransactionDTO(
        id=entry.id,  # type: ignore[arg-type]
        type=entry.type.value,
        product_id=entry.product_id,
        quantity=entry.quantity,
        warehouse_id=entry.warehouse_id,
        to_warehouse_id=entry.to_warehouse_id,
        reference_number=entry.reference_number,
        notes=entry.notes,
        created_by=entry.created_by,
        created_at=entry.created_at.strftime(TIMESTAMP_FORMAT),
    )
