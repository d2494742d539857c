"""Tests for the ReservationEngine: stock effects of order transitions."""

import pytest

from tests.fakes import FakeTransactionRepository
from tests.world import build_world, make_product
from wms.domain.exceptions import InvalidTransitionError
from wms.domain.model.order import DEFAULT_EXPIRY_WINDOW, Order, OrderLineItem, OrderStatus
from wms.domain.model.transaction import TransactionType
from wms.domain.model.value_objects import Money, Quantity
from wms.domain.service.reservation_engine import ReservationEngine
from wms.domain.service.stock_ledger import StockLedger
from wms.domain.service.transaction_log import TransactionLog


def _pending_order(world, qty: int = 30) -> Order:
    order = Order.create(
        order_number="ORD20240501093000",
        customer_id="C-1",
        customer_name="Alice",
        warehouse_id="1",
        items=[
            OrderLineItem("1", "Widget", "WID-001", Quantity(qty), Money.of("10000")),
        ],
        created_at=world.clock(),
        expires_in=DEFAULT_EXPIRY_WINDOW,
    )
    world.engine.reserve_for_order(order)
    return order


class TestLifecycle:

    def test_reserve_on_create(self):
        world = build_world([make_product("1", stock=100)])
        _pending_order(world)
        assert world.counters("1") == (100, 30, 70)

    def test_cancel_pending_releases(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.engine.transition(order, OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED
        assert world.counters("1") == (100, 0, 100)

    def test_cancel_confirmed_releases(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.engine.transition(order, OrderStatus.CONFIRMED)
        world.engine.transition(order, OrderStatus.CANCELLED)
        assert world.counters("1") == (100, 0, 100)

    def test_confirm_and_process_do_not_touch_stock(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.engine.transition(order, OrderStatus.CONFIRMED)
        world.engine.transition(order, OrderStatus.PROCESSING)
        assert world.counters("1") == (100, 30, 70)
        assert world.log.count() == 1

    def test_ship_deducts_stock(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        for status in (OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.SHIPPED):
            world.engine.transition(order, status)
        assert world.counters("1") == (70, 0, 70)

    def test_deliver_does_not_touch_stock(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        for status in (
            OrderStatus.CONFIRMED,
            OrderStatus.PROCESSING,
            OrderStatus.SHIPPED,
            OrderStatus.DELIVERED,
        ):
            world.engine.transition(order, status)
        assert world.counters("1") == (70, 0, 70)

    def test_log_entries_reference_the_order(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.engine.transition(order, OrderStatus.CANCELLED)
        entries = world.transactions.list_all()
        assert [e.type for e in entries] == [TransactionType.CHECKOUT, TransactionType.RELEASE]
        assert {e.reference_number for e in entries} == {order.order_number}

    def test_rejected_transition_leaves_stock_alone(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        with pytest.raises(InvalidTransitionError):
            world.engine.transition(order, OrderStatus.SHIPPED)
        assert order.status == OrderStatus.PENDING_PAYMENT
        assert world.counters("1") == (100, 30, 70)


class TestExpiry:

    def test_not_due_before_deadline(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.clock.advance(minutes=59)
        assert world.engine.expire_if_due(order) is False
        assert world.counters("1") == (100, 30, 70)

    def test_expiry_releases_once(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.clock.advance(hours=1, seconds=1)

        assert world.engine.expire_if_due(order) is True
        assert order.status == OrderStatus.EXPIRED
        assert world.counters("1") == (100, 0, 100)

        assert world.engine.expire_if_due(order) is False
        assert world.counters("1") == (100, 0, 100)
        assert world.log.count() == 2

    def test_confirmed_order_never_expires(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.engine.transition(order, OrderStatus.CONFIRMED)
        world.clock.advance(days=2)
        assert world.engine.expire_if_due(order) is False
        assert order.status == OrderStatus.CONFIRMED

    def test_manual_expire_before_deadline_rejected(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.clock.advance(minutes=5)
        with pytest.raises(InvalidTransitionError, match="expiry deadline"):
            world.engine.transition(order, OrderStatus.EXPIRED)


class BrokenLogRepository(FakeTransactionRepository):

    def append_all(self, entries):
        raise OSError("disk full")


class TestFailedWrites:

    def _engine_with_broken_log(self, world):
        ledger = StockLedger(
            world.products, world.warehouses, TransactionLog(BrokenLogRepository()),
            clock=world.clock,
        )
        return ReservationEngine(ledger, clock=world.clock)

    def test_failed_log_write_reverts_saved_order(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)
        world.orders.save(order)
        engine = self._engine_with_broken_log(world)

        with pytest.raises(OSError):
            engine.transition(order, OrderStatus.CANCELLED, save=world.orders.save)

        assert order.status == OrderStatus.PENDING_PAYMENT
        assert world.orders.get_by_id(order.id).status == OrderStatus.PENDING_PAYMENT
        assert world.counters("1") == (100, 30, 70)

    def test_failed_save_leaves_order_and_stock(self):
        world = build_world([make_product("1", stock=100)])
        order = _pending_order(world)

        def save(_order):
            raise OSError("disk full")

        with pytest.raises(OSError):
            world.engine.transition(order, OrderStatus.CANCELLED, save=save)

        assert order.status == OrderStatus.PENDING_PAYMENT
        assert order.updated_at is None
        assert world.counters("1") == (100, 30, 70)
        assert world.log.count() == 1
