"""Application service: lazy order expiry.

Every read of an order passes through ``refresh`` first, so a
``pending_payment`` order past its deadline is expired, and its stock
released, before anyone sees it.  The per-order lock around
load-expire-save makes concurrent readers release the stock only once.
"""

from __future__ import annotations

import logging

from wms.domain.model.order import Order
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.service.reservation_engine import ReservationEngine

logger = logging.getLogger(__name__)


def order_lock_key(order_id: int) -> str:
    return f"order:{order_id}"


class ExpireOrdersHandler:

    def __init__(self, order_repo: OrderRepository, engine: ReservationEngine) -> None:
        self._order_repo = order_repo
        self._engine = engine

    def refresh(self, order_id: int) -> Order | None:
        """Load an order, expiring it first if its deadline has passed."""
        return self._refresh(order_id)[0]

    def handle(self) -> list[str]:
        """Sweep every order; return the order numbers expired by this call."""
        now = self._engine.now()
        expired: list[str] = []
        for order in self._order_repo.list_all():
            if order.id is None or not order.is_due_for_expiry(now):
                continue
            refreshed, changed = self._refresh(order.id)
            if refreshed is not None and changed:
                expired.append(refreshed.order_number)
        return expired

    def _refresh(self, order_id: int) -> tuple[Order | None, bool]:
        with self._engine.order_lock(order_lock_key(order_id)):
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                return None, False
            if not self._engine.expire_if_due(order, save=self._order_repo.save):
                return order, False
        logger.info("order %s expired, reserved stock released", order.order_number)
        return order, True
