"""Application service: Update Order Status use case.

Drives one transition of the order state machine and its stock effect
(``PUT /orders/:id/status``).  Terminal orders are immutable; an order
found past its payment deadline is expired first and the requested
change is then rejected.
"""

from __future__ import annotations

from wms.application.dto import OrderDTO, order_to_dto
from wms.application.expire_orders import order_lock_key
from wms.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    ValidationError,
)
from wms.domain.model.order import OrderStatus
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.service.reservation_engine import ReservationEngine
from wms.domain.service.stock_ledger import SYSTEM_USER


def parse_status(value: str | OrderStatus) -> OrderStatus:
    if isinstance(value, OrderStatus):
        return value
    try:
        return OrderStatus(value.strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(
            f"Unknown order status '{value}'. Expected one of: {allowed}"
        ) from None


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository, engine: ReservationEngine) -> None:
        self._order_repo = order_repo
        self._engine = engine

    def handle(
        self,
        order_id: int,
        status: str | OrderStatus,
        created_by: str = SYSTEM_USER,
    ) -> OrderDTO:
        target = parse_status(status)

        with self._engine.order_lock(order_lock_key(order_id)):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            if target != OrderStatus.EXPIRED and self._engine.expire_if_due(
                order, save=self._order_repo.save
            ):
                raise InvalidTransitionError(
                    f"Order {order.order_number} has expired and cannot be updated"
                )

            self._engine.transition(order, target, created_by, save=self._order_repo.save)

        return order_to_dto(order)
