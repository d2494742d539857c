"""Application service: Show Order use case (query)."""

from __future__ import annotations

from wms.application.dto import OrderDTO, order_to_dto
from wms.application.expire_orders import ExpireOrdersHandler
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.service.reservation_engine import ReservationEngine


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository, engine: ReservationEngine) -> None:
        self._expiry = ExpireOrdersHandler(order_repo, engine)

    def handle(self, order_id: int) -> OrderDTO:
        order = self._expiry.refresh(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)
