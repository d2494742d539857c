"""Application service: Create Order use case.

Orchestrates the flow between repositories, the Order aggregate and the
Reservation Engine.  An order is only persisted once every line has been
reserved; if any line fails, no stock moves and nothing is saved.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from wms.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from wms.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from wms.domain.model.order import (
    DEFAULT_EXPIRY_WINDOW,
    Order,
    OrderLineItem,
    generate_order_number,
)
from wms.domain.model.value_objects import Quantity
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.warehouse_repository import WarehouseRepository
from wms.domain.service.reservation_engine import ReservationEngine
from wms.domain.service.stock_ledger import SYSTEM_USER

logger = logging.getLogger(__name__)

NEW_ORDER_LOCK = "order:new"


def merge_item_specs(item_specs: list[OrderItemSpec]) -> list[OrderItemSpec]:
    """Combine repeated products into one line, keeping first-seen order."""
    totals: dict[str, int] = {}
    for spec in item_specs:
        Quantity(spec.quantity)
        totals[spec.product_id] = totals.get(spec.product_id, 0) + spec.quantity
    return [OrderItemSpec(product_id=pid, quantity=qty) for pid, qty in totals.items()]


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        warehouse_repo: WarehouseRepository,
        engine: ReservationEngine,
        expires_in: timedelta = DEFAULT_EXPIRY_WINDOW,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._warehouse_repo = warehouse_repo
        self._engine = engine
        self._expires_in = expires_in

    def handle(
        self,
        customer_id: str,
        customer_name: str,
        warehouse_id: str,
        item_specs: list[OrderItemSpec],
        notes: str = "",
        created_by: str = SYSTEM_USER,
    ) -> OrderDTO:
        """Create an order in ``pending_payment`` with its stock reserved.

        Steps:
        1. Check the warehouse exists and is active.
        2. Resolve every product in that warehouse and snapshot its price.
        3. Let the Order aggregate validate its own rules.
        4. Reserve all lines and persist the order in one ledger write.
        """
        if not warehouse_id:
            raise ValidationError("Warehouse is required")
        warehouse = self._warehouse_repo.get_by_id(warehouse_id)
        if warehouse is None:
            raise EntityNotFoundError(f"Warehouse with ID '{warehouse_id}' not found")
        warehouse.ensure_active()

        line_items: list[OrderLineItem] = []
        for spec in merge_item_specs(item_specs):
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise EntityNotFoundError(
                    f"Product with ID '{spec.product_id}' not found"
                )
            if product.warehouse_id != warehouse_id:
                raise ValidationError(
                    f"{product.name} is not available in warehouse '{warehouse.name}'"
                )
            if spec.quantity > product.available_stock:
                raise InsufficientStockError(
                    f"Insufficient stock for {product.name}. "
                    f"Available: {product.available_stock}, Requested: {spec.quantity}"
                )
            line_items.append(
                OrderLineItem(
                    product_id=product.id,
                    product_name=product.name,
                    sku=product.sku,
                    quantity=Quantity(spec.quantity),
                    unit_price=product.price,  # <-- price snapshot
                )
            )

        # Numbering and saving are serialized so two orders never share a number.
        with self._engine.order_lock(NEW_ORDER_LOCK):
            now = self._engine.now()
            order = Order.create(
                order_number=self._unique_order_number(generate_order_number(now)),
                customer_id=customer_id,
                customer_name=customer_name,
                warehouse_id=warehouse_id,
                items=line_items,
                created_at=now,
                expires_in=self._expires_in,
                notes=notes,
            )

            try:
                self._engine.reserve_for_order(order, created_by, save=self._order_repo.save)
            except Exception:
                if order.id is not None:
                    logger.warning(
                        "order %s not created, discarding saved record", order.order_number
                    )
                    self._order_repo.delete(order.id)
                raise

        logger.info(
            "order %s created for %s (%d lines, total %s)",
            order.order_number, order.customer_name, len(order.items), order.total_amount,
        )
        return order_to_dto(order)

    def _unique_order_number(self, base: str) -> str:
        candidate, suffix = base, 1
        while self._order_repo.get_by_order_number(candidate) is not None:
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate
