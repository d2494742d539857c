"""Domain service: Reservation Engine.

Coordinates the cross-aggregate effect of an order status change on
product stock.  It lives in the domain layer because which transition
reserves, releases or ships stock is a core business rule:

==================  ===========  ================
from                to           stock effect
==================  ===========  ================
(new)               pending      reserve
pending_payment     confirmed    none
pending_payment     cancelled    release
pending_payment     expired      release
confirmed           processing   none
confirmed           cancelled    release
processing          shipped      ship out
shipped             delivered    none
==================  ===========  ================
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from wms.domain.model.order import Order, OrderStatus
from wms.domain.service.locks import KeyedLocks
from wms.domain.service.stock_ledger import SYSTEM_USER, StockLedger, StockLine

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReservationEngine:

    def __init__(
        self,
        ledger: StockLedger,
        clock: Callable[[], datetime] = _utcnow,
        order_locks: KeyedLocks | None = None,
    ) -> None:
        self._ledger = ledger
        self._clock = clock
        self._order_locks = order_locks or KeyedLocks()

    def now(self) -> datetime:
        return self._clock()

    @contextmanager
    def order_lock(self, key: str) -> Iterator[None]:
        """Serialize load-transition-save cycles on one order."""
        with self._order_locks.hold(key):
            yield

    # --- Stock effects --------------------------------------------------------

    def reserve_for_order(
        self,
        order: Order,
        created_by: str = SYSTEM_USER,
        save: Callable[[Order], None] | None = None,
    ) -> None:
        """Reserve every line of a new order, or nothing at all.

        ``save`` persists the order inside the same ledger write; if it
        fails the reservation is undone and no log entry is written.
        """
        self._ledger.reserve_all(
            self._lines(order), reference=order.order_number, created_by=created_by,
            commit=(lambda: save(order)) if save is not None else None,
        )

    # --- Transitions ----------------------------------------------------------

    def transition(
        self,
        order: Order,
        target: OrderStatus,
        created_by: str = SYSTEM_USER,
        save: Callable[[Order], None] | None = None,
    ) -> None:
        """Apply the stock effect of ``target``, then move the order there.

        The transition is validated first, so a rejected transition never
        touches stock.  When ``save`` is given the order is persisted as
        part of the stock change: if either fails, stock counters and the
        order's status are both left as they were.
        """
        now = self._clock()
        order.ensure_can_transition(target, now)
        previous, previous_updated_at = order.status, order.updated_at
        saved = False

        def commit() -> None:
            nonlocal saved
            order.transition_to(target, now)
            if save is not None:
                save(order)
                saved = True

        lines = self._lines(order)
        try:
            if target in (OrderStatus.CANCELLED, OrderStatus.EXPIRED):
                self._ledger.release_all(
                    lines, reference=order.order_number, created_by=created_by,
                    commit=commit,
                )
            elif target == OrderStatus.SHIPPED:
                self._ledger.ship_out_all(
                    lines, reference=order.order_number, created_by=created_by,
                    commit=commit,
                )
            else:
                commit()
        except Exception:
            order.status = previous
            order.updated_at = previous_updated_at
            if saved:
                save(order)
            raise

        logger.info(
            "order %s: %s -> %s", order.order_number, previous.value, target.value
        )

    def expire_if_due(
        self,
        order: Order,
        save: Callable[[Order], None] | None = None,
    ) -> bool:
        """Expire a pending order past its deadline; no-op otherwise.

        Callers hold ``order_lock`` around load and this call so the
        release happens at most once.
        """
        if not order.is_due_for_expiry(self._clock()):
            return False
        self.transition(order, OrderStatus.EXPIRED, save=save)
        return True

    @staticmethod
    def _lines(order: Order) -> list[StockLine]:
        return [StockLine(item.product_id, item.quantity.value) for item in order.items]
