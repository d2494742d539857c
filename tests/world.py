"""Builds a fully wired in-memory system for tests."""

from __future__ import annotations

from dataclasses import dataclass

from tests.fakes import (
    FakeClock,
    FakeOrderRepository,
    FakeProductRepository,
    FakeTransactionRepository,
    FakeWarehouseRepository,
)
from wms.domain.model.product import Product
from wms.domain.model.value_objects import Money
from wms.domain.model.warehouse import Warehouse
from wms.domain.service.reservation_engine import ReservationEngine
from wms.domain.service.stock_ledger import StockLedger
from wms.domain.service.transaction_log import TransactionLog


@dataclass
class World:
    clock: FakeClock
    products: FakeProductRepository
    warehouses: FakeWarehouseRepository
    orders: FakeOrderRepository
    transactions: FakeTransactionRepository
    log: TransactionLog
    ledger: StockLedger
    engine: ReservationEngine

    def product(self, product_id: str) -> Product:
        product = self.products.get_by_id(product_id)
        assert product is not None
        return product

    def counters(self, product_id: str) -> tuple[int, int, int]:
        """(stock, reserved, available) of a product."""
        p = self.product(product_id)
        return p.stock, p.reserved_stock, p.available_stock


def make_product(
    id: str = "1",
    name: str = "Widget",
    sku: str = "WID-001",
    price: str = "10000",
    warehouse_id: str = "1",
    stock: int = 100,
    reserved_stock: int = 0,
    min_stock: int = 10,
) -> Product:
    return Product(
        id=id,
        name=name,
        sku=sku,
        price=Money.of(price),
        warehouse_id=warehouse_id,
        stock=stock,
        reserved_stock=reserved_stock,
        min_stock=min_stock,
    )


def default_warehouses() -> list[Warehouse]:
    return [
        Warehouse(id="1", name="Jakarta Central", capacity=1000, code="JKT"),
        Warehouse(id="2", name="Surabaya East", capacity=500, code="SUB"),
        Warehouse(id="3", name="Old Depot", is_active=False, code="OLD"),
    ]


def build_world(
    products: list[Product] | None = None,
    warehouses: list[Warehouse] | None = None,
) -> World:
    clock = FakeClock()
    product_repo = FakeProductRepository(
        products if products is not None else [make_product()]
    )
    warehouse_repo = FakeWarehouseRepository(
        warehouses if warehouses is not None else default_warehouses()
    )
    transactions = FakeTransactionRepository()
    log = TransactionLog(transactions)
    ledger = StockLedger(product_repo, warehouse_repo, log, clock=clock)
    engine = ReservationEngine(ledger, clock=clock)
    return World(
        clock=clock,
        products=product_repo,
        warehouses=warehouse_repo,
        orders=FakeOrderRepository(),
        transactions=transactions,
        log=log,
        ledger=ledger,
        engine=engine,
    )
